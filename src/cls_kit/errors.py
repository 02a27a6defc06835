# src/cls_kit/errors.py

from enum import Enum
from typing import Any


class Stage(str, Enum):
    """Decoding stage that raised an error."""

    CURSOR = "cursor"
    PRIMITIVE = "primitive"
    TEXT = "text"
    HEADER = "header"
    RECORD = "record"
    DISPATCH = "dispatch"
    MODEL = "model"


class ParseError(Exception):
    """Base class for every decoding failure.

    Carries the absolute byte offset where decoding stopped, the stage that
    failed and, when known, what was expected versus what was found.
    """

    default_stage: Stage = Stage.DISPATCH

    def __init__(
        self,
        message: str,
        *,
        offset: int,
        stage: Stage | None = None,
        expected: Any = None,
        actual: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.stage = stage or self.default_stage
        self.expected = expected
        self.actual = actual

    def __str__(self) -> str:
        details = f"stage={self.stage.value}, offset={self.offset}"
        if self.expected is not None or self.actual is not None:
            details += f", expected={self.expected!r}, actual={self.actual!r}"
        return f"{self.message} ({details})"


class OutOfBounds(ParseError):
    default_stage = Stage.CURSOR


class MalformedField(ParseError):
    default_stage = Stage.PRIMITIVE


class EncodingError(ParseError):
    default_stage = Stage.TEXT


class ShortRecord(ParseError):
    default_stage = Stage.RECORD


class UnknownKind(ParseError):
    default_stage = Stage.RECORD


class DanglingReference(ParseError):
    default_stage = Stage.MODEL


class InvariantViolation(ParseError):
    default_stage = Stage.MODEL

    def __init__(self, check: str, message: str, *, offset: int, **kwargs: Any):
        super().__init__(message, offset=offset, **kwargs)
        self.check = check

    def __str__(self) -> str:
        return f"[{self.check}] {super().__str__()}"


class TrailingBytes(ParseError):
    default_stage = Stage.DISPATCH


__all__ = [
    "DanglingReference",
    "EncodingError",
    "InvariantViolation",
    "MalformedField",
    "OutOfBounds",
    "ParseError",
    "ShortRecord",
    "Stage",
    "TrailingBytes",
    "UnknownKind",
]
