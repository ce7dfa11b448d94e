# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Bounds-checked random access over a byte buffer

TIFF structures are read by absolute offset with a byte order chosen by the
"II"/"MM" marker. Makernotes may declare their own byte order, so a reader
never changes its order in place: with_byte_order() derives a new reader
over the same buffer instead.

Copyright 2025 DNAi inc.
"""

import struct
from typing import Optional, Union

from dnifd.exceptions import OutOfBoundsError
from dnifd.rational import Rational

BIG_ENDIAN = '>'
LITTLE_ENDIAN = '<'

BufferLike = Union[bytes, bytearray, memoryview]


class ByteReader:
    """
    Random-access reader over an immutable byte buffer.

    All read methods take an absolute offset and raise OutOfBoundsError
    when the requested range is not entirely inside the buffer.
    """

    def __init__(self, data: BufferLike, endian: str = BIG_ENDIAN):
        """
        Initialize the reader.

        Args:
            data: Buffer to read from (not copied)
            endian: Byte order ('>' for Motorola/big-endian, '<' for Intel/little-endian)
        """
        if endian not in (BIG_ENDIAN, LITTLE_ENDIAN):
            raise ValueError(f"Unsupported byte order: {endian!r}")
        self._data = data if isinstance(data, memoryview) else memoryview(data)
        if self._data.ndim != 1 or self._data.itemsize != 1:
            self._data = self._data.cast('B')
        self.endian = endian

    @property
    def length(self) -> int:
        """Number of bytes in the buffer."""
        return len(self._data)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def is_motorola(self) -> bool:
        """True when multi-byte values are read big-endian."""
        return self.endian == BIG_ENDIAN

    def with_byte_order(self, endian: str) -> 'ByteReader':
        """Return a reader over the same buffer using the given byte order."""
        if endian == self.endian:
            return self
        return ByteReader(self._data, endian)

    def flipped(self) -> 'ByteReader':
        """Return a reader over the same buffer with the opposite byte order."""
        return self.with_byte_order(LITTLE_ENDIAN if self.is_motorola else BIG_ENDIAN)

    def slice(self, start: int, length: Optional[int] = None) -> 'ByteReader':
        """
        Return a reader over a sub-range of the buffer.

        Offsets of the returned reader are relative to start.

        Args:
            start: First byte of the sub-range
            length: Number of bytes (defaults to the rest of the buffer)
        """
        if length is None:
            length = self.length - start
        self._validate(start, length)
        return ByteReader(self._data[start:start + length], self.endian)

    def is_valid_range(self, offset: int, length: int) -> bool:
        """Check whether [offset, offset + length) lies inside the buffer."""
        return offset >= 0 and length >= 0 and offset + length <= len(self._data)

    def _validate(self, offset: int, length: int) -> None:
        if not self.is_valid_range(offset, length):
            raise OutOfBoundsError(offset, length, len(self._data))

    def _unpack(self, fmt: str, offset: int, size: int):
        self._validate(offset, size)
        return struct.unpack_from(self.endian + fmt, self._data, offset)[0]

    def read_u8(self, offset: int) -> int:
        self._validate(offset, 1)
        return self._data[offset]

    def read_s8(self, offset: int) -> int:
        return self._unpack('b', offset, 1)

    def read_u16(self, offset: int) -> int:
        return self._unpack('H', offset, 2)

    def read_s16(self, offset: int) -> int:
        return self._unpack('h', offset, 2)

    def read_u32(self, offset: int) -> int:
        return self._unpack('I', offset, 4)

    def read_s32(self, offset: int) -> int:
        return self._unpack('i', offset, 4)

    def read_f32(self, offset: int) -> float:
        return self._unpack('f', offset, 4)

    def read_f64(self, offset: int) -> float:
        return self._unpack('d', offset, 8)

    def read_bytes(self, offset: int, length: int) -> bytes:
        """Read length bytes starting at offset."""
        self._validate(offset, length)
        return bytes(self._data[offset:offset + length])

    def read_string(self, offset: int, length: int, encoding: str = 'ascii') -> str:
        """Read length bytes and decode them, replacing undecodable bytes."""
        return self.read_bytes(offset, length).decode(encoding, errors='replace')

    def read_rational(self, offset: int, signed: bool = False) -> Rational:
        """
        Read an 8-byte rational (numerator then denominator).

        Args:
            offset: Absolute offset of the numerator
            signed: Read SRATIONAL (two SLONGs) instead of URATIONAL
        """
        if signed:
            return Rational(self.read_s32(offset), self.read_s32(offset + 4))
        return Rational(self.read_u32(offset), self.read_u32(offset + 4))

    def starts_with(self, offset: int, prefix: bytes) -> bool:
        """Check for a signature at offset without raising."""
        if not self.is_valid_range(offset, len(prefix)):
            return False
        return bytes(self._data[offset:offset + len(prefix)]) == prefix
