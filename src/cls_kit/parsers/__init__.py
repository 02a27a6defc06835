# Order matters: the grammar modules import config and models from here.
from .config import DEFAULT_ENCODING, ParseConfig
from .models import (
    Color,
    Document,
    Header,
    NamedSwatch,
    Record,
    RecordKind,
    Reference,
    Swatch,
)
from .builder import build_document
from .cls_parser import ClsParser, ParseState, parse
from .options import ParseOptions, config_from_options

__all__ = [
    "DEFAULT_ENCODING",
    "ClsParser",
    "Color",
    "Document",
    "Header",
    "NamedSwatch",
    "ParseConfig",
    "ParseOptions",
    "ParseState",
    "Record",
    "RecordKind",
    "Reference",
    "Swatch",
    "build_document",
    "config_from_options",
    "parse",
]
