# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TIFF data format codes

Copyright 2025 DNAi inc.
"""

from enum import IntEnum
from typing import Optional


class DataFormat(IntEnum):
    """TIFF/EXIF tag data types"""
    BYTE = 1
    STRING = 2  # ASCII, NUL-padded
    USHORT = 3
    ULONG = 4
    URATIONAL = 5
    SBYTE = 6
    UNDEFINED = 7  # Opaque bytes
    SSHORT = 8
    SLONG = 9
    SRATIONAL = 10
    SINGLE = 11  # 32-bit IEEE float
    DOUBLE = 12  # 64-bit IEEE float

    @property
    def size(self) -> int:
        """Width of one component in bytes."""
        return FORMAT_SIZES[self]

    @property
    def struct_code(self) -> Optional[str]:
        """struct format character for numeric formats, None otherwise."""
        return STRUCT_CODES.get(self)

    @property
    def is_rational(self) -> bool:
        return self in (DataFormat.URATIONAL, DataFormat.SRATIONAL)

    @property
    def is_integral(self) -> bool:
        return self in INTEGER_FORMATS

    @classmethod
    def from_code(cls, code: int) -> Optional['DataFormat']:
        """Look up a format code, returning None when it is not a known format."""
        try:
            return cls(code)
        except ValueError:
            return None


# Component sizes in bytes
FORMAT_SIZES = {
    DataFormat.BYTE: 1,
    DataFormat.STRING: 1,
    DataFormat.USHORT: 2,
    DataFormat.ULONG: 4,
    DataFormat.URATIONAL: 8,
    DataFormat.SBYTE: 1,
    DataFormat.UNDEFINED: 1,
    DataFormat.SSHORT: 2,
    DataFormat.SLONG: 4,
    DataFormat.SRATIONAL: 8,
    DataFormat.SINGLE: 4,
    DataFormat.DOUBLE: 8,
}

STRUCT_CODES = {
    DataFormat.BYTE: 'B',
    DataFormat.USHORT: 'H',
    DataFormat.ULONG: 'I',
    DataFormat.SBYTE: 'b',
    DataFormat.SSHORT: 'h',
    DataFormat.SLONG: 'i',
    DataFormat.SINGLE: 'f',
    DataFormat.DOUBLE: 'd',
}

INTEGER_FORMATS = frozenset({
    DataFormat.BYTE,
    DataFormat.USHORT,
    DataFormat.ULONG,
    DataFormat.SBYTE,
    DataFormat.SSHORT,
    DataFormat.SLONG,
})
