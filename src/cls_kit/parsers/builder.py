# src/cls_kit/parsers/builder.py

import logging
from collections.abc import Callable, Sequence
from typing import NoReturn

from cls_kit.errors import DanglingReference, InvariantViolation

from .models import Document, Header, NamedSwatch, Record, RecordKind, Swatch

logger = logging.getLogger(__name__)

KNOWN_RECORD_TYPES: dict[RecordKind, type] = {
    RecordKind.SWATCH: Swatch,
    RecordKind.NAMED_SWATCH: NamedSwatch,
}

MAX_NAME_BYTES = 192
MAX_NAME_CHARS = 64
MAX_COLOR_NAME_UTF16_BYTES = 128

# Size of the body length field that precedes every record.
RECORD_PREFIX_SIZE = 4
# Length field + colour come before the kind discriminant.
KIND_FIELD_OFFSET = 8
# Signature + format version come before the name block.
NAME_BLOCK_OFFSET = 6


class _Check:
    """One whole-document invariant. Raises InvariantViolation on failure."""

    def __init__(
        self, name: str, run: Callable[[Header, Sequence[Record], int], None]
    ) -> None:
        self.name = name
        self.run = run


def _violation(check: str, message: str, offset: int, **kwargs) -> NoReturn:
    raise InvariantViolation(check, message, offset=offset, **kwargs)


def _check_record_count(header: Header, records: Sequence[Record], end: int) -> None:
    if len(records) != header.record_count:
        _violation(
            "record_count",
            f"Header declares {header.record_count} records, "
            f"found {len(records)}",
            end,
            expected=header.record_count,
            actual=len(records),
        )


def _check_non_empty(header: Header, records: Sequence[Record], end: int) -> None:
    if not records:
        _violation("non_empty", "Colour set has no records", header.records_offset)


def _check_indices(header: Header, records: Sequence[Record], end: int) -> None:
    for position, record in enumerate(records):
        if record.index != position:
            _violation(
                "record_indices",
                "Record index does not match its position",
                record.offset,
                expected=position,
                actual=record.index,
            )


def _check_extent(header: Header, records: Sequence[Record], end: int) -> None:
    block_start = header.records_offset
    block_end = block_start + header.record_block_size

    for record in records:
        if not block_start <= record.offset < block_end:
            _violation(
                "record_extent",
                "Record starts outside the declared record block",
                record.offset,
                expected=(block_start, block_end),
                actual=record.offset,
            )

    used = sum(RECORD_PREFIX_SIZE + record.length for record in records)
    if used != header.record_block_size:
        _violation(
            "record_extent",
            "Declared record block size does not match the records",
            block_start,
            expected=header.record_block_size,
            actual=used,
        )


def _check_classification(
    header: Header, records: Sequence[Record], end: int
) -> None:
    # Any alpha byte is valid: 0 is transparent, everything else opaque.
    for record in records:
        kind = getattr(record, "kind", None)
        if KNOWN_RECORD_TYPES.get(kind) is not type(record):
            _violation(
                "classification",
                "Unknown record classification",
                record.offset + KIND_FIELD_OFFSET,
                expected=[int(k) for k in KNOWN_RECORD_TYPES],
                actual=kind,
            )


def _weighted_length(text: str) -> int:
    # Characters outside the BMP count twice.
    return sum(2 if ord(c) > 0xFFFF else 1 for c in text)


def _check_colorset_name(
    header: Header, records: Sequence[Record], end: int
) -> None:
    size = len(header.name.encode("utf-8"))
    if size > MAX_NAME_BYTES:
        _violation(
            "colorset_name",
            f"Colour set name is over {MAX_NAME_BYTES} bytes",
            NAME_BLOCK_OFFSET,
            expected=MAX_NAME_BYTES,
            actual=size,
        )

    count = _weighted_length(header.name)
    if count > MAX_NAME_CHARS:
        _violation(
            "colorset_name",
            f"Colour set name is over {MAX_NAME_CHARS} characters",
            NAME_BLOCK_OFFSET,
            expected=MAX_NAME_CHARS,
            actual=count,
        )


def _check_color_names(header: Header, records: Sequence[Record], end: int) -> None:
    for record in records:
        if not isinstance(record, NamedSwatch):
            continue
        size = len(record.name.encode("utf-16-le"))
        if size > MAX_COLOR_NAME_UTF16_BYTES:
            _violation(
                "color_name",
                f"Colour name is over {MAX_COLOR_NAME_UTF16_BYTES} bytes in UTF-16",
                record.offset,
                expected=MAX_COLOR_NAME_UTF16_BYTES,
                actual=size,
            )


INVARIANTS: tuple[_Check, ...] = (
    _Check("record_count", _check_record_count),
    _Check("non_empty", _check_non_empty),
    _Check("record_indices", _check_indices),
    _Check("record_extent", _check_extent),
    _Check("classification", _check_classification),
    _Check("colorset_name", _check_colorset_name),
    _Check("color_name", _check_color_names),
)


def _resolve_references(records: Sequence[Record]) -> None:
    table = {record.index: record for record in records}

    for record in records:
        for reference in record.references:
            if reference.index not in table:
                logger.error(
                    "Dangling reference: record %d field %s -> %d",
                    record.index,
                    reference.field,
                    reference.index,
                )
                raise DanglingReference(
                    f"Record {record.index} field '{reference.field}' "
                    f"points at missing record {reference.index}",
                    offset=record.offset,
                    expected=f"0..{len(records) - 1}",
                    actual=reference.index,
                )


def build_document(
    header: Header, records: Sequence[Record], *, end_offset: int
) -> Document:
    """Assemble a Document from a header and its decoded records.

    Args:
        header: The decoded header.
        records: Records in file order.
        end_offset: Offset just past the last consumed byte, used to locate
            document-level failures.

    Raises:
        DanglingReference: A record refers to a record that does not exist.
        InvariantViolation: The first whole-document check that fails.
    """
    _resolve_references(records)

    for check in INVARIANTS:
        check.run(header, records, end_offset)
        logger.debug("Invariant passed: %s", check.name)

    return Document(header=header, records=tuple(records))
