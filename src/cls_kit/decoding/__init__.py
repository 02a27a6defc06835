from .cursor import ByteCursor
from .primitives import Endian, decode_float, decode_int, decode_uint, unpack_array
from .text import (
    DecodePolicy,
    decode_text,
    decode_utf16_units,
    resolve_encoding,
    strip_padding,
)

__all__ = [
    "ByteCursor",
    "DecodePolicy",
    "Endian",
    "decode_float",
    "decode_int",
    "decode_text",
    "decode_uint",
    "decode_utf16_units",
    "resolve_encoding",
    "strip_padding",
    "unpack_array",
]
