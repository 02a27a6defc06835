import dataclasses
from typing import ClassVar

import pytest

from cls_kit.errors import DanglingReference, InvariantViolation, Stage
from cls_kit.parsers.builder import build_document
from cls_kit.parsers.models import (
    Color,
    Document,
    Header,
    NamedSwatch,
    Reference,
    Swatch,
)

RECORDS_OFFSET = 38
RED = Color(255, 0, 0, 0xFF)


@dataclasses.dataclass(frozen=True)
class _Gradient(Swatch):
    kind: ClassVar[int] = 7  # type: ignore[assignment]


def _header(**overrides: object) -> Header:
    values: dict[str, object] = {
        "format_version": 1,
        "name": "Test",
        "legacy_name": "Test",
        "encoding": "cp932",
        "reserved": 4,
        "record_count": 2,
        "record_block_size": 12 + 20,
        "records_offset": RECORDS_OFFSET,
    }
    values.update(overrides)
    return Header(**values)  # type: ignore[arg-type]


def _records(*references: Reference) -> list[Swatch | NamedSwatch]:
    return [
        Swatch(index=0, offset=RECORDS_OFFSET, length=8, color=RED),
        NamedSwatch(
            index=1,
            offset=RECORDS_OFFSET + 12,
            length=16,
            color=Color(0, 0, 0, 0),
            name="Red",
            references=references,
        ),
    ]


def _violated_check(header: Header, records: list) -> InvariantViolation:
    with pytest.raises(InvariantViolation) as exc_info:
        build_document(header, records, end_offset=RECORDS_OFFSET + 32)
    return exc_info.value


class TestBuildDocument:
    def test_valid_records_build_a_document(self) -> None:
        records = _records()

        document = build_document(_header(), records, end_offset=70)

        assert isinstance(document, Document)
        assert document.records == tuple(records)
        assert len(document) == 2
        assert [r.index for r in document] == [0, 1]

    def test_document_is_immutable(self) -> None:
        document = build_document(_header(), _records(), end_offset=70)

        with pytest.raises(dataclasses.FrozenInstanceError):
            document.records = ()  # type: ignore[misc]

    def test_resolving_references(self) -> None:
        reference = Reference(field="base", index=0)

        document = build_document(_header(), _records(reference), end_offset=70)

        assert document.resolve(reference) is document.records[0]

    def test_resolve_rejects_foreign_reference(self) -> None:
        document = build_document(_header(), _records(), end_offset=70)

        with pytest.raises(KeyError, match="Record 5 not found"):
            document.resolve(Reference(field="base", index=5))


class TestReferences:
    @pytest.mark.parametrize("index", [2, 99, -1])
    def test_reference_outside_index_range_is_dangling(self, index: int) -> None:
        records = _records(Reference(field="base", index=index))

        with pytest.raises(DanglingReference) as exc_info:
            build_document(_header(), records, end_offset=70)

        error = exc_info.value
        assert error.actual == index
        assert error.offset == RECORDS_OFFSET + 12
        assert error.stage is Stage.MODEL
        assert "field 'base'" in str(error)

    def test_first_dangling_reference_is_reported(self) -> None:
        records = _records(
            Reference(field="first", index=7), Reference(field="second", index=8)
        )

        with pytest.raises(DanglingReference, match="first"):
            build_document(_header(), records, end_offset=70)

    def test_references_are_checked_before_invariants(self) -> None:
        records = _records(Reference(field="base", index=9))

        with pytest.raises(DanglingReference):
            build_document(_header(record_count=5), records, end_offset=70)


class TestInvariants:
    def test_fewer_records_than_declared(self) -> None:
        error = _violated_check(_header(record_count=3), _records())

        assert error.check == "record_count"
        assert "declares 3 records, found 2" in str(error)
        assert error.offset == RECORDS_OFFSET + 32

    def test_empty_colorset(self) -> None:
        error = _violated_check(_header(record_count=0, record_block_size=0), [])

        assert error.check == "non_empty"

    def test_indices_follow_file_order(self) -> None:
        records = _records()
        records[1] = dataclasses.replace(records[1], index=3)

        assert _violated_check(_header(), records).check == "record_indices"

    def test_block_size_must_match_records(self) -> None:
        error = _violated_check(_header(record_block_size=40), _records())

        assert error.check == "record_extent"
        assert (error.expected, error.actual) == (40, 32)

    def test_record_outside_block(self) -> None:
        records = _records()
        records[1] = dataclasses.replace(records[1], offset=RECORDS_OFFSET + 64)

        assert _violated_check(_header(), records).check == "record_extent"

    @pytest.mark.parametrize("alpha", [0x01, 0x7F, 0x80, 0xFE])
    def test_any_non_zero_alpha_is_opaque(self, alpha: int) -> None:
        records = _records()
        records[0] = dataclasses.replace(records[0], color=Color(1, 2, 3, alpha))

        document = build_document(_header(), records, end_offset=70)

        assert not document.records[0].color.transparent
        assert document.records[0].color.rgb == (1, 2, 3)

    def test_unknown_record_classification(self) -> None:
        records = _records()
        records[0] = _Gradient(index=0, offset=RECORDS_OFFSET, length=8, color=RED)

        error = _violated_check(_header(), records)

        assert error.check == "classification"
        assert error.offset == RECORDS_OFFSET + 8
        assert error.actual == 7

    def test_colorset_name_byte_limit(self) -> None:
        error = _violated_check(_header(name="é" * 97), _records())

        assert error.check == "colorset_name"

    def test_colorset_name_character_limit(self) -> None:
        # 62 + 2 * 2 = 66 weighted characters, well under 192 bytes
        name = "t" * 62 + "\U0001f5ff" * 2

        assert _violated_check(_header(name=name), _records()).check == "colorset_name"

    @pytest.mark.parametrize(
        "name",
        ["あ" * 64, "t" * 62 + "\U0001f5ff", "㐀test\U0001f5ffsetД"],
    )
    def test_colorset_names_within_limits(self, name: str) -> None:
        document = build_document(_header(name=name), _records(), end_offset=70)

        assert document.header.name == name

    @pytest.mark.parametrize(
        "name",
        [
            "\U0001f5ff" * 33,
            "あ" * 63 + "\U0001f5ff",
            "€" * 63 + "\U0001f5ff",
            "a" * 63 + "\U0001f5ff",
        ],
    )
    def test_color_name_over_128_utf16_bytes(self, name: str) -> None:
        records = _records()
        records[1] = dataclasses.replace(records[1], name=name)

        assert _violated_check(_header(), records).check == "color_name"

    def test_color_name_at_limit(self) -> None:
        records = _records()
        records[1] = dataclasses.replace(records[1], name="a" * 64)

        assert build_document(_header(), records, end_offset=70).records[1] is records[1]
