# src/cls_kit/parsers/options.py

from typing import Any

from pydantic import BaseModel, field_validator

from cls_kit.decoding.text import DecodePolicy, resolve_encoding

from .config import ParseConfig


class ParseOptions(BaseModel):
    """Parse options as handed over by a host adapter (JSON-like mapping)."""

    strict_trailing_bytes: bool = False
    encoding: str | None = None
    on_decode_error: DecodePolicy = DecodePolicy.FAIL

    class Config:
        extra = "forbid"

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return resolve_encoding(value)

    def to_config(self) -> ParseConfig:
        return ParseConfig(
            strict_trailing_bytes=self.strict_trailing_bytes,
            encoding=self.encoding,
            on_decode_error=self.on_decode_error,
        )


def config_from_options(options: dict[str, Any] | None) -> ParseConfig:
    """Validate a host-provided option mapping into a ParseConfig.

    Raises:
        pydantic.ValidationError: On unknown keys or invalid values.
    """
    if not options:
        return ParseConfig()
    return ParseOptions(**options).to_config()
