"""Tests for array format selection and rendering."""

from __future__ import annotations

import pytest

from toonkit import EncodingOptions, encode
from toonkit.engine.arrays import array_header, common_keys, encode_array, tabular_columns
from toonkit.engine.writer import LineWriter


def _render(key, items, **options) -> str:
    writer = LineWriter()
    encode_array(key, items, EncodingOptions(**options), 0, writer)
    return writer.render()


class TestHeader:
    def test_comma_omitted(self) -> None:
        assert array_header(3) == "[3]"

    def test_other_delimiters_embedded(self) -> None:
        assert array_header(3, "|") == "[3|]"
        assert array_header(2, "\t") == "[2\t]"


class TestCommonKeys:
    def test_first_element_order(self) -> None:
        items = [{"b": 1, "a": 2, "c": 3}, {"c": 1, "a": 2, "b": 3}]
        assert common_keys(items) == ["b", "a", "c"]

    def test_intersection(self) -> None:
        items = [{"a": 1, "b": 2}, {"b": 3, "c": 4}, {"b": 5, "a": 6}]
        assert common_keys(items) == ["b"]

    def test_disjoint(self) -> None:
        assert common_keys([{"a": 1}, {"b": 2}]) == []

    def test_tabular_requires_primitive_values(self) -> None:
        assert tabular_columns([{"a": 1}, {"a": [1]}]) is None
        assert tabular_columns([{"a": 1, "x": {"y": 1}}, {"a": 2}]) is None
        assert tabular_columns([{"a": 1}, {"a": None}]) == ["a"]

    def test_tabular_requires_objects(self) -> None:
        assert tabular_columns([{"a": 1}, 2]) is None
        assert tabular_columns([]) is None


class TestInline:
    def test_root(self) -> None:
        assert encode([1, 2, 3]) == "[3]: 1,2,3"

    def test_keyed(self) -> None:
        assert _render("nums", [1, "two", None, True]) == "nums[4]: 1,two,null,true"

    def test_quoted_key(self) -> None:
        assert _render("my list", ["a"]) == '"my list"[1]: a'

    def test_pipe(self) -> None:
        assert encode(["a,b", "c"], delimiter="pipe") == "[2|]: a,b|c"

    def test_tab(self) -> None:
        assert encode({"t": ["a b", "c"]}, delimiter="\t") == "t[2\t]: a b\tc"

    def test_values_quoted_against_active_delimiter(self) -> None:
        assert encode(["a|b", "c"], delimiter="|") == '[2|]: "a|b"|c'


class TestEmpty:
    def test_root(self) -> None:
        assert encode([]) == "[0]"

    def test_keyed(self) -> None:
        assert encode({"tags": []}) == "tags[0]"

    def test_keyed_pipe(self) -> None:
        assert encode({"tags": []}, delimiter="pipe") == "tags[0|]"

    def test_list_item(self) -> None:
        assert encode([[], 1]) == "[2]:\n  - []\n  - 1"


class TestTabular:
    def test_basic(self) -> None:
        assert encode([{"a": 1, "b": 2}, {"a": 3, "b": 4}]) == "[2]{a,b}:\n  1,2\n  3,4"

    def test_keyed(self, employees) -> None:
        assert encode({"staff": employees}).splitlines() == [
            "staff[3]{id,name,role,active}:",
            "  1,Alice,admin,true",
            "  2,Bob,user,false",
            "  3,Carol,user,true",
        ]

    def test_extra_keys_dropped(self) -> None:
        assert encode([{"a": 1, "b": 2}, {"a": 3}]) == "[2]{a}:\n  1\n  3"

    def test_nan_keeps_tabular(self) -> None:
        data = [{"id": 1, "score": float("nan")}, {"id": 2, "score": 0.5}]
        assert encode(data) == "[2]{id,score}:\n  1,null\n  2,0.5"

    def test_pipe_fields_and_rows(self) -> None:
        data = [{"a": 1, "b": "x|y"}, {"a": 2, "b": "z,w"}]
        assert encode(data, delimiter="pipe") == '[2|]{a|b}:\n  1|"x|y"\n  2|z,w'

    def test_quoted_field_names(self) -> None:
        data = [{"first name": "A", "id": 1}, {"first name": "B", "id": 2}]
        assert encode(data) == '[2]{"first name",id}:\n  A,1\n  B,2'

    def test_nested_under_key(self) -> None:
        data = {"outer": {"rows": [{"a": 1}, {"a": 2}]}}
        assert encode(data) == "outer:\n  rows[2]{a}:\n    1\n    2"


class TestNestedList:
    def test_primitive_sub_arrays(self) -> None:
        assert encode({"m": [[1, 2], [], [3]]}).splitlines() == [
            "m[3]:",
            "  - [2]: 1,2",
            "  - []",
            "  - [1]: 3",
        ]

    def test_sub_array_of_records(self) -> None:
        assert encode([[{"a": 1}, {"a": 2}]]).splitlines() == [
            "[1]:",
            "  - [2]{a}:",
            "    1",
            "    2",
        ]

    def test_deeply_nested(self) -> None:
        assert encode([[[1], [2, 3]]]).splitlines() == [
            "[1]:",
            "  - [2]:",
            "    - [1]: 1",
            "    - [2]: 2,3",
        ]


class TestMixedList:
    def test_no_common_keys(self) -> None:
        result = encode([{"a": 1}, {"b": 2}])
        assert result == "[2]:\n  - a: 1\n  - b: 2"
        assert "{}" not in result

    def test_mixed_kinds(self) -> None:
        data = {"items": [{"id": 1, "tags": ["x", "y"], "meta": {"k": "v"}}, 5, [1, 2]]}
        assert encode(data).splitlines() == [
            "items[3]:",
            "  - id: 1",
            "    tags[2]: x,y",
            "    meta:",
            "      k: v",
            "  - 5",
            "  - [2]: 1,2",
        ]

    def test_array_of_arrays_inside_mixed_is_rendered(self) -> None:
        assert encode([1, [[1], [2]]]).splitlines() == [
            "[2]:",
            "  - 1",
            "  - [2]:",
            "    - [1]: 1",
            "    - [1]: 2",
        ]

    def test_empty_object_item(self) -> None:
        assert encode([{}, 1]) == "[2]:\n  -\n  - 1"
        assert encode([{}]) == "[1]:\n  -"


class TestListItemObject:
    def test_tabular_first_field(self) -> None:
        data = {
            "groups": [
                {"users": [{"id": 1, "name": "Ann"}, {"id": 2, "name": "Bo"}], "label": "core"},
                {"label": "misc"},
            ]
        }
        assert encode(data).splitlines() == [
            "groups[2]:",
            "  - users[2]{id,name}:",
            "      1,Ann",
            "      2,Bo",
            "    label: core",
            "  - label: misc",
        ]

    def test_primitive_array_first_field(self) -> None:
        data = [{"tags": ["a", "b"], "n": 1}, {"x": [1]}]
        assert encode(data).splitlines() == [
            "[2]:",
            "  - tags[2]: a,b",
            "    n: 1",
            "  - x[1]: 1",
        ]

    def test_empty_array_first_field(self) -> None:
        assert encode([{"tags": [], "n": 1}, {"m": {}}]).splitlines() == [
            "[2]:",
            "  - tags[0]",
            "    n: 1",
            "  - m:",
        ]

    def test_non_tabular_array_first_field(self) -> None:
        data = {"rows": [{"vals": [1, {"x": 1}], "n": 1}]}
        assert encode(data).splitlines() == [
            "rows[1]:",
            "  - vals[2]:",
            "      - 1",
            "      - x: 1",
            "    n: 1",
        ]

    def test_object_first_field(self) -> None:
        data = [{"meta": {"a": 1, "b": 2}, "id": 7}]
        assert encode(data).splitlines() == [
            "[1]:",
            "  - meta:",
            "      a: 1",
            "      b: 2",
            "    id: 7",
        ]

    def test_later_fields_use_full_dispatch(self) -> None:
        data = [{"id": 1, "rows": [{"a": 1}, {"a": 2}], "empty": [], "obj": {}}, "x"]
        assert encode(data).splitlines() == [
            "[2]:",
            "  - id: 1",
            "    rows[2]{a}:",
            "      1",
            "      2",
            "    empty[0]",
            "    obj:",
            "  - x",
        ]

    def test_later_fields_collapse(self) -> None:
        data = [{"id": 1, "a": {"b": {"c": 2}}}, "x"]
        assert encode(data, key_collapsing="safe").splitlines() == [
            "[2]:",
            "  - id: 1",
            "    a.b.c: 2",
            "  - x",
        ]

    @pytest.mark.parametrize("indent", [1, 4])
    def test_indent_unit_applies_to_list_items(self, indent: int) -> None:
        unit = " " * indent
        data = [{"meta": {"a": 1}, "id": 7}, 1]
        assert encode(data, indent=indent).splitlines() == [
            "[2]:",
            f"{unit}- meta:",
            f"{unit * 3}a: 1",
            f"{unit * 2}id: 7",
            f"{unit}- 1",
        ]
