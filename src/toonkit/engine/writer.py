"""Indentation-aware line accumulator."""

from __future__ import annotations


class LineWriter:
    """Collects finished lines, each prefixed by ``depth`` indent units."""

    def __init__(self, indent: int = 2) -> None:
        self.indent_unit = " " * indent
        self.lines: list[str] = []
        self._indents: dict[int, str] = {0: ""}

    def push(self, depth: int, content: str) -> None:
        prefix = self._indents.get(depth)
        if prefix is None:
            prefix = self.indent_unit * depth
            self._indents[depth] = prefix
        self.lines.append(prefix + content.rstrip())

    def render(self) -> str:
        return "\n".join(self.lines)

    def __len__(self) -> int:
        return len(self.lines)
