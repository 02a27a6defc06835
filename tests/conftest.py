import struct
from collections.abc import Callable

import pytest


def _encode_swatch(
    red: int,
    green: int,
    blue: int,
    alpha: int = 0xFF,
    *,
    name: str | None = None,
    name_bytes: bytes | None = None,
    kind: int | None = None,
    length: int | None = None,
) -> bytes:
    """Encode one record the way Clip Studio Paint writes it."""
    named = name is not None or name_bytes is not None
    if kind is None:
        kind = 1 if named else 0

    body = bytes([red, green, blue, alpha]) + struct.pack("<I", kind)
    if named:
        raw = name_bytes if name_bytes is not None else name.encode("utf-16-le")
        body += struct.pack("<H", len(raw)) + raw

    declared = len(body) if length is None else length
    return struct.pack("<I", declared) + body


def _encode_colorset(
    records: list[bytes],
    *,
    name: str = "Test",
    name_bytes: bytes | None = None,
    legacy_bytes: bytes | None = None,
    record_count: int | None = None,
    block_size: int | None = None,
    magic: bytes = b"SLCC",
    version: int = 1,
    reserved: int = 4,
    trailing: bytes = b"",
) -> bytes:
    """Encode a whole file around already encoded records."""
    legacy = legacy_bytes if legacy_bytes is not None else name.encode("cp932")
    utf8 = name_bytes if name_bytes is not None else name.encode("utf-8")
    names = (
        struct.pack("<H", len(legacy))
        + legacy
        + struct.pack("<I", 0)
        + struct.pack("<H", len(utf8))
        + utf8
    )

    body = b"".join(records)
    return (
        magic
        + struct.pack(">H", version)
        + struct.pack("<I", len(names))
        + names
        + struct.pack(
            "<III",
            reserved,
            len(records) if record_count is None else record_count,
            len(body) if block_size is None else block_size,
        )
        + body
        + trailing
    )


@pytest.fixture
def make_swatch() -> Callable[..., bytes]:
    return _encode_swatch


@pytest.fixture
def make_colorset() -> Callable[..., bytes]:
    return _encode_colorset


@pytest.fixture
def sample_cls() -> bytes:
    """Three records: opaque red, a named transparent one, named blue."""
    return _encode_colorset(
        [
            _encode_swatch(255, 0, 0),
            _encode_swatch(0, 0, 0, 0, name="Clear"),
            _encode_swatch(1, 128, 255, name="空"),
        ],
        name="Palette",
    )


class RecordingMetricsHook:
    def __init__(self) -> None:
        self.latencies: list[tuple[str, dict[str, str] | None]] = []
        self.counters: list[tuple[str, int, dict[str, str] | None]] = []

    def record_latency(
        self, name: str, value_ms: float, labels: dict[str, str] | None = None
    ) -> None:
        self.latencies.append((name, labels))

    def increment(
        self, name: str, value: int = 1, labels: dict[str, str] | None = None
    ) -> None:
        self.counters.append((name, value, labels))


@pytest.fixture
def metrics() -> RecordingMetricsHook:
    return RecordingMetricsHook()
