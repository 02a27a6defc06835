# src/cls_kit/grammar/combinators.py

"""Small parser building blocks.

A parser is any callable taking a ByteCursor and returning a value. Parsers
advance the cursor on success and raise a ParseError on failure; they keep
no state between calls, so a parser value can be shared freely.
"""

from collections.abc import Callable
from typing import Any, TypeVar

from cls_kit.decoding.cursor import ByteCursor
from cls_kit.decoding.primitives import Endian, decode_uint, unpack_array
from cls_kit.decoding.text import DecodePolicy, decode_text, decode_utf16_units
from cls_kit.errors import MalformedField, ShortRecord, Stage

T = TypeVar("T")

Parser = Callable[[ByteCursor], T]


def uint(width: int, endian: Endian) -> Parser[int]:
    def parse(cursor: ByteCursor) -> int:
        offset = cursor.position
        return decode_uint(cursor.read(width), width, endian, offset=offset)

    return parse


u8 = uint(1, Endian.LITTLE)
u16le = uint(2, Endian.LITTLE)
u16be = uint(2, Endian.BIG)
u32le = uint(4, Endian.LITTLE)


def take(size: int) -> Parser[memoryview]:
    def parse(cursor: ByteCursor) -> memoryview:
        return cursor.read(size)

    return parse


def literal(expected: bytes, what: str) -> Parser[bytes]:
    def parse(cursor: ByteCursor) -> bytes:
        offset = cursor.position
        actual = bytes(cursor.read(len(expected)))
        if actual != expected:
            raise MalformedField(
                f"Bad {what}",
                offset=offset,
                stage=Stage.HEADER,
                expected=expected,
                actual=actual,
            )
        return actual

    return parse


def sequence(*parsers: Parser[Any]) -> Parser[tuple[Any, ...]]:
    def parse(cursor: ByteCursor) -> tuple[Any, ...]:
        return tuple(p(cursor) for p in parsers)

    return parse


def fields(factory: Callable[..., T], **parsers: Parser[Any]) -> Parser[T]:
    """Apply `parsers` in keyword order and build `factory(**values)`."""

    def parse(cursor: ByteCursor) -> T:
        return factory(**{name: p(cursor) for name, p in parsers.items()})

    return parse


def length_delimited(
    length_parser: Parser[int],
    body: Parser[T],
    *,
    what: str,
) -> Parser[T]:
    """Read a length, then run `body` on exactly that many bytes.

    ShortRecord points at the length field when the declared length overruns
    the input. MalformedField is raised when `body` leaves bytes unread.
    """

    def parse(cursor: ByteCursor) -> T:
        start = cursor.position
        declared = length_parser(cursor)
        if declared > cursor.remaining:
            raise ShortRecord(
                f"{what} declares more bytes than remain",
                offset=start,
                expected=declared,
                actual=cursor.remaining,
            )

        window = cursor.slice(declared)
        value = body(window)
        if not window.at_end:
            raise MalformedField(
                f"{what} length does not match its contents",
                offset=start,
                stage=Stage.RECORD,
                expected=declared,
                actual=declared - window.remaining,
            )
        return value

    return parse


def text_field(
    length_parser: Parser[int], encoding: str, policy: DecodePolicy
) -> Parser[str]:
    def parse(cursor: ByteCursor) -> str:
        size = length_parser(cursor)
        offset = cursor.position
        return decode_text(cursor.read(size), encoding, offset=offset, policy=policy)

    return parse


def utf16_field(length_parser: Parser[int], policy: DecodePolicy) -> Parser[str]:
    def parse(cursor: ByteCursor) -> str:
        size = length_parser(cursor)
        offset = cursor.position
        units = unpack_array(
            cursor.read(size), "u", 2, Endian.LITTLE, offset=offset
        )
        return decode_utf16_units(units, offset=offset, policy=policy)

    return parse
