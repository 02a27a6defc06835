# src/cls_kit/grammar/header.py

import logging
from dataclasses import dataclass

from cls_kit.decoding.cursor import ByteCursor
from cls_kit.decoding.text import DecodePolicy
from cls_kit.errors import Stage, UnknownKind
from cls_kit.parsers.config import ParseConfig
from cls_kit.parsers.models import Header

from .combinators import (
    Parser,
    fields,
    length_delimited,
    literal,
    text_field,
    u16be,
    u16le,
    u32le,
)

logger = logging.getLogger(__name__)

MAGIC = b"SLCC"
SUPPORTED_VERSIONS = frozenset({1})


@dataclass(frozen=True)
class _Names:
    legacy_name: str
    delimiter: int
    name: str


def _format_version(cursor: ByteCursor) -> int:
    offset = cursor.position
    version = u16be(cursor)
    if version not in SUPPORTED_VERSIONS:
        raise UnknownKind(
            "Unsupported format version",
            offset=offset,
            stage=Stage.HEADER,
            expected=sorted(SUPPORTED_VERSIONS),
            actual=version,
        )
    return version


def header_grammar(config: ParseConfig) -> Parser[Header]:
    """Build the header parser for the given decoding options.

    The name block stores the colour set name twice: once in the legacy
    encoding and once as UTF-8. Both are decoded. The UTF-8 name is the
    authoritative one, so bytes the legacy codec cannot map become U+FFFD
    instead of failing the parse.
    """
    encoding = config.effective_encoding
    policy = config.on_decode_error

    names = length_delimited(
        u32le,
        fields(
            _Names,
            legacy_name=text_field(u16le, encoding, DecodePolicy.REPLACE),
            delimiter=u32le,
            name=text_field(u16le, "utf-8", policy),
        ),
        what="Colour set name block",
    )

    def parse(cursor: ByteCursor) -> Header:
        literal(MAGIC, "file signature")(cursor)
        version = _format_version(cursor)
        decoded = names(cursor)
        reserved = u32le(cursor)
        record_count = u32le(cursor)
        record_block_size = u32le(cursor)

        logger.debug(
            "Read header: version=%d, name=%r, records=%d, block=%d bytes",
            version,
            decoded.name,
            record_count,
            record_block_size,
        )
        return Header(
            format_version=version,
            name=decoded.name,
            legacy_name=decoded.legacy_name,
            encoding=encoding,
            reserved=reserved,
            record_count=record_count,
            record_block_size=record_block_size,
            records_offset=cursor.position,
        )

    return parse
