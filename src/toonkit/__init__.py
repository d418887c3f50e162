"""toonkit: encode Python values as TOON (Token-Oriented Object Notation)."""

from toonkit.contracts.common import MaxDepthExceeded, NotEncodable, ToonError
from toonkit.contracts.options import Delimiter, EncodingOptions
from toonkit.engine.encoder import encode
from toonkit.engine.normalize import ToonSerializable, normalize
from toonkit.engine.replacer import OMIT, apply_replacer
from toonkit.io.config import load_options, load_options_from_dir, options_from_env

__version__ = "0.1.0"

__all__ = [
    "OMIT",
    "Delimiter",
    "EncodingOptions",
    "MaxDepthExceeded",
    "NotEncodable",
    "ToonError",
    "ToonSerializable",
    "__version__",
    "apply_replacer",
    "encode",
    "load_options",
    "load_options_from_dir",
    "normalize",
    "options_from_env",
]
