# src/cls_kit/decoding/text.py

import codecs
import logging
from enum import Enum

import numpy as np

from cls_kit.errors import EncodingError

logger = logging.getLogger(__name__)

PAD_BYTES = b"\x00 "
PAD_UNITS = (0x0000, 0x0020)

REPLACEMENT_CHARACTER = "�"


class DecodePolicy(str, Enum):
    """What to do with byte sequences the declared encoding cannot decode."""

    FAIL = "fail"
    REPLACE = "replace"

    @property
    def errors(self) -> str:
        return "strict" if self is DecodePolicy.FAIL else "replace"


def resolve_encoding(encoding_id: str) -> str:
    """Return the canonical codec name for `encoding_id`.

    Raises:
        ValueError: If Python has no codec registered under that name, or the
            codec is not a bytes-to-str text encoding (e.g. "hex").
    """
    try:
        name = codecs.lookup(encoding_id).name
        b"".decode(name)
    except LookupError:
        raise ValueError(f"Unknown text encoding: {encoding_id}")
    return name


def strip_padding(window: bytes | memoryview) -> bytes:
    """Copy `window` out of the source buffer without trailing NUL/space."""
    return bytes(window).rstrip(PAD_BYTES)


def decode_text(
    window: bytes | memoryview,
    encoding: str,
    *,
    offset: int,
    policy: DecodePolicy = DecodePolicy.FAIL,
) -> str:
    """Decode a fixed-length byte window in a byte-oriented encoding."""
    raw = strip_padding(window)
    try:
        return raw.decode(encoding, errors=policy.errors)
    except UnicodeDecodeError as exc:
        logger.debug("Undecodable %s text at offset %d", encoding, offset + exc.start)
        raise EncodingError(
            f"Cannot decode text as {encoding}: {exc.reason}",
            offset=offset + exc.start,
            expected=encoding,
            actual=raw[exc.start : exc.end].hex(),
        ) from exc


def decode_utf16_units(
    units: np.ndarray,
    *,
    offset: int,
    policy: DecodePolicy = DecodePolicy.FAIL,
) -> str:
    """Decode an array of UTF-16 code units.

    Trailing NUL and space units are padding. Lone surrogates are invalid.
    """
    keep = np.flatnonzero(~np.isin(units, PAD_UNITS))
    end = int(keep[-1]) + 1 if keep.size else 0
    raw = units[:end].astype("<u2").tobytes()
    try:
        return raw.decode("utf-16-le", errors=policy.errors)
    except UnicodeDecodeError as exc:
        logger.debug("Undecodable UTF-16 text at offset %d", offset + exc.start)
        raise EncodingError(
            f"Cannot decode text as utf-16-le: {exc.reason}",
            offset=offset + exc.start,
            expected="utf-16-le",
            actual=raw[exc.start : exc.end].hex(),
        ) from exc
