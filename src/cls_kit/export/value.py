# src/cls_kit/export/value.py

"""Document -> plain value tree.

Key order is fixed and part of the contract:

    header:  format_version, name, legacy_name, encoding, record_count,
             record_block_size
    records: index, kind, offset, length, color, name (named swatches only),
             references

Only dicts, lists, str, int and bool appear in the tree, so it can be handed
to json or to a host runtime as is.
"""

import json
import logging
from enum import Enum
from time import monotonic
from typing import Any

from cls_kit.observability import names
from cls_kit.observability.base import MetricsHook, NoOpMetricsHook
from cls_kit.parsers.models import Color, Document, Header, NamedSwatch, Record

logger = logging.getLogger(__name__)


class ColorFormat(str, Enum):
    """How colours are written into the value tree."""

    STRUCT = "struct"
    SEQ = "seq"
    HEX = "hex"
    HEX_WITH_NUMBER_SIGN = "hex_with_number_sign"


def color_value(color: Color, color_format: ColorFormat = ColorFormat.STRUCT) -> Any:
    red, green, blue = color.rgb
    if color_format is ColorFormat.STRUCT:
        return {
            "red": red,
            "green": green,
            "blue": blue,
            "transparency": color.transparent,
        }

    # Transparent colours carry no meaningful RGB in the flat formats.
    if color_format is ColorFormat.SEQ:
        return [] if color.transparent else [red, green, blue]
    if color.transparent:
        return ""
    return color.hex(number_sign=color_format is ColorFormat.HEX_WITH_NUMBER_SIGN)


def _header_value(header: Header) -> dict[str, Any]:
    return {
        "format_version": header.format_version,
        "name": header.name,
        "legacy_name": header.legacy_name,
        "encoding": header.encoding,
        "record_count": header.record_count,
        "record_block_size": header.record_block_size,
    }


def _record_value(record: Record, color_format: ColorFormat) -> dict[str, Any]:
    value: dict[str, Any] = {
        "index": record.index,
        "kind": record.kind.name.lower(),
        "offset": record.offset,
        "length": record.length,
        "color": color_value(record.color, color_format),
    }
    if isinstance(record, NamedSwatch):
        value["name"] = record.name
    value["references"] = [
        {"field": ref.field, "index": ref.index} for ref in record.references
    ]
    return value


def to_value(
    document: Document,
    *,
    color_format: ColorFormat = ColorFormat.STRUCT,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> dict[str, Any]:
    """Convert a Document into a nested dict/list tree.

    The tree is rebuilt on every call; callers may mutate it freely.
    """
    start = monotonic()
    color_format = ColorFormat(color_format)
    value = {
        "header": _header_value(document.header),
        "records": [_record_value(r, color_format) for r in document.records],
    }

    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(
        names.CLS_EXPORT_DURATION, elapsed_ms, labels={"format": color_format.value}
    )
    logger.info(
        "Exported %d records with %s colours", len(document), color_format.value
    )
    return value


def to_json(
    document: Document,
    *,
    color_format: ColorFormat = ColorFormat.STRUCT,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> str:
    """Serialize a Document as compact JSON.

    Same Document in, same string out.
    """
    value = to_value(document, color_format=color_format, metrics_hook=metrics_hook)
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
