# src/cls_kit/decoding/primitives.py

"""Fixed-width numeric decoding.

Every function takes an exact-width slice and an explicit byte order.
`offset` is only used to report where a malformed field sits in the source.
"""

import struct
from enum import Enum

import numpy as np

from cls_kit.errors import MalformedField

_INT_WIDTHS = (1, 2, 4, 8)
_FLOAT_FORMATS = {4: "f", 8: "d"}


class Endian(str, Enum):
    LITTLE = "little"
    BIG = "big"

    @property
    def struct_prefix(self) -> str:
        return "<" if self is Endian.LITTLE else ">"


def _check_width(view: bytes | memoryview, width: int, offset: int) -> None:
    if len(view) != width:
        raise MalformedField(
            f"Expected a {width}-byte field",
            offset=offset,
            expected=width,
            actual=len(view),
        )


def decode_uint(
    view: bytes | memoryview, width: int, endian: Endian, *, offset: int = 0
) -> int:
    if width not in _INT_WIDTHS:
        raise ValueError(f"Unsupported integer width: {width}")
    _check_width(view, width, offset)
    return int.from_bytes(view, endian.value, signed=False)


def decode_int(
    view: bytes | memoryview, width: int, endian: Endian, *, offset: int = 0
) -> int:
    if width not in _INT_WIDTHS:
        raise ValueError(f"Unsupported integer width: {width}")
    _check_width(view, width, offset)
    return int.from_bytes(view, endian.value, signed=True)


def decode_float(
    view: bytes | memoryview, width: int, endian: Endian, *, offset: int = 0
) -> float:
    try:
        code = _FLOAT_FORMATS[width]
    except KeyError:
        raise ValueError(f"Unsupported float width: {width}")
    _check_width(view, width, offset)
    return struct.unpack(endian.struct_prefix + code, view)[0]


def unpack_array(
    view: bytes | memoryview,
    code: str,
    width: int,
    endian: Endian,
    *,
    offset: int = 0,
) -> np.ndarray:
    """Reinterpret a run of fixed-size elements as a numpy array.

    `code` is a numpy kind ("u", "i" or "f"). The result shares memory with
    `view` when it is aligned and already in native byte order; otherwise the
    elements are converted one by one into a native-order copy.
    """
    dtype = np.dtype(f"{endian.struct_prefix}{code}{width}")
    if len(view) % dtype.itemsize:
        raise MalformedField(
            f"Array of {dtype.itemsize}-byte elements has a ragged length",
            offset=offset,
            expected=f"multiple of {dtype.itemsize}",
            actual=len(view),
        )

    array = np.frombuffer(view, dtype=dtype)
    if array.dtype.isnative and array.flags.aligned:
        return array
    return array.astype(dtype.newbyteorder("="))
