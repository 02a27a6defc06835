# src/cls_kit/grammar/records.py

from collections.abc import Callable
from dataclasses import dataclass

from cls_kit.decoding.cursor import ByteCursor
from cls_kit.errors import MalformedField, Stage, UnknownKind
from cls_kit.parsers.config import ParseConfig
from cls_kit.parsers.models import Color, NamedSwatch, Record, RecordKind, Swatch

from .combinators import fields, length_delimited, u8, u16le, u32le, utf16_field

RecordParser = Callable[[ByteCursor, int], Record]

# colour + kind discriminant, present in every record body
FIXED_BODY_SIZE = 8

color = fields(Color, red=u8, green=u8, blue=u8, alpha=u8)


def _kind(expected: RecordKind) -> Callable[[ByteCursor], RecordKind]:
    def parse(cursor: ByteCursor) -> RecordKind:
        offset = cursor.position
        value = u32le(cursor)
        if value != expected:
            raise MalformedField(
                "Record kind changed while decoding",
                offset=offset,
                stage=Stage.RECORD,
                expected=int(expected),
                actual=value,
            )
        return expected

    return parse


def swatch_grammar() -> RecordParser:
    body = length_delimited(
        u32le,
        fields(dict, color=color, kind=_kind(RecordKind.SWATCH)),
        what="Swatch record",
    )

    def parse(cursor: ByteCursor, index: int) -> Swatch:
        offset = cursor.position
        values = body(cursor)
        return Swatch(
            index=index,
            offset=offset,
            length=cursor.position - offset - 4,
            color=values["color"],
        )

    return parse


def named_swatch_grammar(config: ParseConfig) -> RecordParser:
    body = length_delimited(
        u32le,
        fields(
            dict,
            color=color,
            kind=_kind(RecordKind.NAMED_SWATCH),
            name=utf16_field(u16le, config.on_decode_error),
        ),
        what="Named swatch record",
    )

    def parse(cursor: ByteCursor, index: int) -> NamedSwatch:
        offset = cursor.position
        values = body(cursor)
        return NamedSwatch(
            index=index,
            offset=offset,
            length=cursor.position - offset - 4,
            color=values["color"],
            name=values["name"],
        )

    return parse


@dataclass(frozen=True)
class RecordGrammars:
    """Record parsers for one configuration, built once and reused."""

    swatch: RecordParser
    named_swatch: RecordParser

    @classmethod
    def build(cls, config: ParseConfig) -> "RecordGrammars":
        return cls(swatch=swatch_grammar(), named_swatch=named_swatch_grammar(config))

    def select(self, kind: int, *, offset: int) -> RecordParser:
        """Return the parser for a record discriminant.

        Raises:
            UnknownKind: If `kind` is not a known record discriminant.
                `offset` is where the discriminant was read.
        """
        if kind == RecordKind.SWATCH:
            return self.swatch

        if kind == RecordKind.NAMED_SWATCH:
            return self.named_swatch

        raise UnknownKind(
            "Unknown record kind",
            offset=offset,
            expected=[int(k) for k in RecordKind],
            actual=kind,
        )


def record_grammar(kind: int, config: ParseConfig, *, offset: int) -> RecordParser:
    """One-off lookup; parsers that decode many records keep a RecordGrammars."""
    return RecordGrammars.build(config).select(kind, offset=offset)
