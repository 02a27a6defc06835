# src/cls_kit/decoding/cursor.py

from __future__ import annotations

from cls_kit.errors import OutOfBounds

BytesLike = bytes | bytearray | memoryview


class ByteCursor:
    """Bounded, zero-copy cursor over an in-memory buffer.

    - Reads return memoryview slices of the source, never copies
    - Offsets are absolute into the source buffer, also for sub-cursors
    - Only `restore` moves the position backwards
    """

    __slots__ = ("_view", "_start", "_pos", "_end")

    def __init__(
        self, data: BytesLike, offset: int = 0, end: int | None = None
    ) -> None:
        view = data if isinstance(data, memoryview) else memoryview(data)
        self._view = view.cast("B") if view.format != "B" else view
        self._end = len(self._view) if end is None else end
        if not 0 <= offset <= self._end <= len(self._view):
            raise ValueError(
                f"Cursor window [{offset}, {end}) is outside the buffer "
                f"of {len(self._view)} bytes"
            )
        self._start = offset
        self._pos = offset

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return self._end - self._pos

    @property
    def at_end(self) -> bool:
        return self._pos >= self._end

    def _check(self, size: int, action: str) -> None:
        if size < 0:
            raise ValueError(f"Cannot {action} a negative number of bytes: {size}")
        if size > self.remaining:
            raise OutOfBounds(
                f"{action.capitalize()} of {size} bytes would exceed buffer end",
                offset=self._pos,
                expected=size,
                actual=self.remaining,
            )

    def read(self, size: int) -> memoryview:
        self._check(size, "read")
        chunk = self._view[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def peek(self) -> int:
        self._check(1, "peek")
        return self._view[self._pos]

    def advance(self, size: int) -> None:
        self._check(size, "advance")
        self._pos += size

    def save(self) -> int:
        return self._pos

    def restore(self, mark: int) -> None:
        if not self._start <= mark <= self._end:
            raise ValueError(
                f"Mark {mark} is outside cursor window [{self._start}, {self._end}]"
            )
        self._pos = mark

    def slice(self, size: int) -> ByteCursor:
        """Return a cursor bounded to the next `size` bytes.

        Advances this cursor past the sliced region.
        """
        self._check(size, "slice")
        sub = ByteCursor(self._view, self._pos, self._pos + size)
        self._pos += size
        return sub

    def __repr__(self) -> str:
        return (
            f"ByteCursor(position={self._pos}, remaining={self.remaining}, "
            f"window=[{self._start}, {self._end}))"
        )
