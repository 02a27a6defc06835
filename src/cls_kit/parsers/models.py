# src/cls_kit/parsers/models.py

from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

TRANSPARENT_ALPHA = 0x00


class RecordKind(IntEnum):
    """Record discriminant as stored in the file."""

    SWATCH = 0
    NAMED_SWATCH = 1


@dataclass(frozen=True)
class Color:
    red: int
    green: int
    blue: int
    alpha: int

    @property
    def transparent(self) -> bool:
        return self.alpha == TRANSPARENT_ALPHA

    @property
    def rgb(self) -> tuple[int, int, int]:
        """Displayed RGB. Transparent colours are black whatever the file holds."""
        if self.transparent:
            return (0, 0, 0)
        return (self.red, self.green, self.blue)

    def hex(self, number_sign: bool = False) -> str:
        value = "".join(f"{channel:02X}" for channel in self.rgb)
        return f"#{value}" if number_sign else value


@dataclass(frozen=True)
class Reference:
    """Link from one record to another, by position in the document."""

    field: str
    index: int


@dataclass(frozen=True)
class Swatch:
    kind: ClassVar[RecordKind] = RecordKind.SWATCH

    index: int
    offset: int
    length: int
    color: Color
    references: tuple[Reference, ...] = ()


@dataclass(frozen=True)
class NamedSwatch:
    kind: ClassVar[RecordKind] = RecordKind.NAMED_SWATCH

    index: int
    offset: int
    length: int
    color: Color
    name: str
    references: tuple[Reference, ...] = ()


Record = Swatch | NamedSwatch


@dataclass(frozen=True)
class Header:
    format_version: int
    name: str
    legacy_name: str
    encoding: str
    reserved: int
    record_count: int
    record_block_size: int
    records_offset: int


@dataclass(frozen=True)
class Document:
    """A fully validated colour set.

    Only `build_document` creates documents; a Document always satisfies
    every model invariant and never points back into the source buffer.
    """

    header: Header
    records: tuple[Record, ...]

    def resolve(self, reference: Reference) -> Record:
        if not 0 <= reference.index < len(self.records):
            raise KeyError(f"Record {reference.index} not found")
        return self.records[reference.index]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)
