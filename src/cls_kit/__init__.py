# Errors
from .errors import (
    DanglingReference,
    EncodingError,
    InvariantViolation,
    MalformedField,
    OutOfBounds,
    ParseError,
    ShortRecord,
    Stage,
    TrailingBytes,
    UnknownKind,
)

# Decoding
from .decoding import ByteCursor, DecodePolicy, Endian

# Parsers
from .parsers import (
    ClsParser,
    Color,
    Document,
    Header,
    NamedSwatch,
    ParseConfig,
    ParseOptions,
    Record,
    RecordKind,
    Reference,
    Swatch,
    build_document,
    config_from_options,
    parse,
)

# Export
from .export import ColorFormat, to_json, to_value

# Observability
from .observability import LoggingMetricsHook, MetricsHook, NoOpMetricsHook

__all__ = [
    # Errors
    "DanglingReference",
    "EncodingError",
    "InvariantViolation",
    "MalformedField",
    "OutOfBounds",
    "ParseError",
    "ShortRecord",
    "Stage",
    "TrailingBytes",
    "UnknownKind",
    # Decoding
    "ByteCursor",
    "DecodePolicy",
    "Endian",
    # Parsers
    "ClsParser",
    "Color",
    "Document",
    "Header",
    "NamedSwatch",
    "ParseConfig",
    "ParseOptions",
    "Record",
    "RecordKind",
    "Reference",
    "Swatch",
    "build_document",
    "config_from_options",
    "parse",
    # Export
    "ColorFormat",
    "to_json",
    "to_value",
    # Observability
    "LoggingMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
]
