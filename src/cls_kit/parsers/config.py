# src/cls_kit/parsers/config.py

from dataclasses import dataclass

from cls_kit.decoding.text import DecodePolicy, resolve_encoding

# WHATWG Shift_JIS, which is what Clip Studio Paint writes.
DEFAULT_ENCODING = "cp932"


@dataclass(frozen=True)
class ParseConfig:
    """Configuration for decoding CLS buffers.

    Immutable. Explicit. No magic defaults from environment.
    """

    strict_trailing_bytes: bool = False
    encoding: str | None = None  # Falls back to the format's legacy encoding
    on_decode_error: DecodePolicy = DecodePolicy.FAIL

    def __post_init__(self) -> None:
        if self.encoding is not None:
            resolve_encoding(self.encoding)

    @property
    def effective_encoding(self) -> str:
        return self.encoding or DEFAULT_ENCODING
