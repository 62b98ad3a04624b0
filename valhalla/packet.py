"""Little-endian packet encoding and decoding for the game wire format."""

from __future__ import annotations

import struct

ENCODING = "utf-8"


class PacketUnderflowError(ValueError):
    """Raised when a read needs more bytes than the packet holds."""


class PacketWriter:
    """Builds a packet body field by field."""

    def __init__(self, opcode: int | None = None) -> None:
        self._buffer = bytearray()
        if opcode is not None:
            self.write_byte(opcode)

    def _pack(self, fmt: str, value: int) -> "PacketWriter":
        try:
            self._buffer += struct.pack(fmt, value)
        except struct.error as exc:
            raise ValueError(f"{value!r} does not fit field format {fmt!r}") from exc
        return self

    def write_byte(self, value: int) -> "PacketWriter":
        return self._pack("<B", value)

    def write_bool(self, value: bool) -> "PacketWriter":
        return self.write_byte(1 if value else 0)

    def write_int8(self, value: int) -> "PacketWriter":
        return self._pack("<b", value)

    def write_int16(self, value: int) -> "PacketWriter":
        return self._pack("<h", value)

    def write_int32(self, value: int) -> "PacketWriter":
        return self._pack("<i", value)

    def write_uint32(self, value: int) -> "PacketWriter":
        return self._pack("<I", value)

    def write_int64(self, value: int) -> "PacketWriter":
        return self._pack("<q", value)

    def write_uint64(self, value: int) -> "PacketWriter":
        return self._pack("<Q", value)

    def write_bytes(self, data: bytes) -> "PacketWriter":
        self._buffer += bytes(data)
        return self

    def write_string(self, value: str) -> "PacketWriter":
        """Write a string prefixed by its int16 byte length."""
        encoded = value.encode(ENCODING)
        self.write_int16(len(encoded))
        self._buffer += encoded
        return self

    def write_padded_string(self, value: str, length: int) -> "PacketWriter":
        """Write a string into a fixed-size field, truncated or zero padded."""
        if length < 0:
            raise ValueError("padded string length must not be negative")
        encoded = value.encode(ENCODING)[:length]
        self._buffer += encoded.ljust(length, b"\x00")
        return self

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __len__(self) -> int:
        return len(self._buffer)


class PacketReader:
    """Reads fields sequentially from a packet body."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def _take(self, count: int) -> bytes:
        if count < 0:
            raise ValueError("cannot read a negative number of bytes")
        if count > self.remaining:
            raise PacketUnderflowError(
                f"need {count} bytes at offset {self._pos}, only {self.remaining} left"
            )
        chunk = self._data[self._pos:self._pos + count]
        self._pos += count
        return chunk

    def _unpack(self, fmt: str) -> int:
        return struct.unpack(fmt, self._take(struct.calcsize(fmt)))[0]

    def read_byte(self) -> int:
        return self._unpack("<B")

    def read_bool(self) -> bool:
        return self.read_byte() != 0

    def read_int8(self) -> int:
        return self._unpack("<b")

    def read_int16(self) -> int:
        return self._unpack("<h")

    def read_int32(self) -> int:
        return self._unpack("<i")

    def read_uint32(self) -> int:
        return self._unpack("<I")

    def read_int64(self) -> int:
        return self._unpack("<q")

    def read_bytes(self, count: int) -> bytes:
        return self._take(count)

    def read_string(self, length: int) -> str:
        return self._take(length).decode(ENCODING, errors="replace")

    def skip(self, count: int) -> None:
        self._take(count)

    def rest(self) -> bytes:
        """Return the unread bytes without consuming them."""
        return self._data[self._pos:]