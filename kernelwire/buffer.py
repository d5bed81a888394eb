"""Fixed-capacity byte buffer with a moving offset, used for wire payloads."""

from __future__ import annotations

import struct

_UINT32 = struct.Struct("<I")
_UINT8 = struct.Struct("<B")


class BufferOverflowError(ValueError):
    """Raised when a write or read would go past the end of a buffer."""


class Buffer:
    """A payload of fixed size with a single offset shared by writes and reads."""

    __slots__ = ("_stream", "offset")

    def __init__(self, size: int = 0) -> None:
        if size < 0:
            raise ValueError("buffer size cannot be negative")
        self._stream = bytearray(size)
        self.offset = 0

    @property
    def size(self) -> int:
        return len(self._stream)

    @property
    def remaining(self) -> int:
        """Bytes between the offset and the end of the buffer."""
        return self.size - self.offset

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"Buffer(size={self.size}, offset={self.offset})"

    def _check(self, size: int) -> None:
        if size < 0:
            raise ValueError("size cannot be negative")
        if self.offset + size > self.size:
            raise BufferOverflowError(
                f"buffer overflow: offset {self.offset} + {size} > size {self.size}"
            )

    def add(self, data: bytes | bytearray | memoryview) -> None:
        """Copy ``data`` in at the offset and advance past it."""
        chunk = bytes(data)
        self._check(len(chunk))
        self._stream[self.offset : self.offset + len(chunk)] = chunk
        self.offset += len(chunk)

    def read(self, size: int) -> bytes:
        """Return the next ``size`` bytes and advance past them."""
        self._check(size)
        chunk = bytes(self._stream[self.offset : self.offset + size])
        self.offset += size
        return chunk

    def add_uint32(self, value: int) -> None:
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"value out of uint32 range: {value}")
        self.add(_UINT32.pack(value))

    def read_uint32(self) -> int:
        return _UINT32.unpack(self.read(_UINT32.size))[0]

    def add_uint8(self, value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"value out of uint8 range: {value}")
        self.add(_UINT8.pack(value))

    def read_uint8(self) -> int:
        return _UINT8.unpack(self.read(_UINT8.size))[0]

    def add_string(self, text: str | bytes) -> None:
        """Write a uint32 length followed by the string's bytes (UTF-8 for ``str``)."""
        raw = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        self._check(_UINT32.size + len(raw))
        self.add_uint32(len(raw))
        self.add(raw)

    def read_string(self) -> str:
        """Read a uint32 length and that many bytes, decoded as UTF-8."""
        start = self.offset
        length = self.read_uint32()
        try:
            raw = self.read(length)
        except BufferOverflowError:
            self.offset = start
            raise
        return raw.decode("utf-8")

    def add_data(self, data: bytes | bytearray | memoryview) -> None:
        """Copy raw bytes in at the offset, with no length prefix."""
        self.add(data)

    def read_data(self, size: int) -> bytes:
        """Read ``size`` raw bytes at the offset."""
        return self.read(size)

    def getvalue(self) -> bytes:
        """The whole payload, independent of the offset."""
        return bytes(self._stream)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> "Buffer":
        """A buffer holding ``data`` with its offset at the start, ready to read."""
        buffer = cls(0)
        buffer._stream = bytearray(data)
        return buffer