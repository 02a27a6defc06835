from .combinators import (
    Parser,
    fields,
    length_delimited,
    literal,
    sequence,
    take,
    text_field,
    u8,
    u16be,
    u16le,
    u32le,
    uint,
    utf16_field,
)
from .header import MAGIC, header_grammar
from .records import RecordGrammars, record_grammar

__all__ = [
    "MAGIC",
    "Parser",
    "RecordGrammars",
    "fields",
    "header_grammar",
    "length_delimited",
    "literal",
    "record_grammar",
    "sequence",
    "take",
    "text_field",
    "u8",
    "u16be",
    "u16le",
    "u32le",
    "uint",
    "utf16_field",
]
