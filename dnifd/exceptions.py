# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for DNIFD

This module defines the exceptions raised while reading TIFF/IFD structures
and the structured error records that directories accumulate instead of
aborting a decode.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Categories of problems found while decoding IFD structures."""
    OUT_OF_BOUNDS = "out_of_bounds"  # Read past the end of the buffer
    TRUNCATED_IFD = "truncated_ifd"  # Entry table header or body incomplete
    TRUNCATED_VALUE = "truncated_value"  # Value region exceeds the buffer
    UNKNOWN_DATA_FORMAT = "unknown_data_format"  # Format code outside 1..12
    UNPARSEABLE_DATE = "unparseable_date"
    UNRESOLVED_POINTER = "unresolved_pointer"  # Bad, cyclic or too deep IFD pointer
    UNSUPPORTED_MAKERNOTE = "unsupported_makernote"


@dataclass(frozen=True)
class DirectoryError:
    """A problem recorded on a directory while decoding continued."""
    kind: ErrorKind
    message: str
    tag_id: Optional[int] = None
    offset: Optional[int] = None

    def __str__(self) -> str:
        if self.tag_id is not None:
            return f"{self.message} (tag 0x{self.tag_id:04X})"
        return self.message


class DNIFDError(Exception):
    """
    Base exception for all DNIFD errors.

    All DNIFD exceptions inherit from this class, allowing
    catch-all error handling for any DNIFD-related errors.
    """
    def __init__(self, message: str = ""):
        """
        Initialize the exception with an optional error message.

        Args:
            message: Descriptive error message explaining what went wrong
        """
        self.message = message
        super().__init__(message)


class MetadataReadError(DNIFDError):
    """
    Raised when metadata cannot be read at all.

    This exception is raised when:
    - The TIFF byte order marker is neither "II" nor "MM"
    - The TIFF marker is not one of the known values
    - The input file cannot be opened
    """
    pass


class DecodeError(DNIFDError):
    """
    Base class for problems inside an IFD structure.

    Decode errors never escape the IFD reader: they are converted into
    DirectoryError records on the directory being decoded.
    """
    kind = ErrorKind.OUT_OF_BOUNDS

    def __init__(self, message: str = "", offset: Optional[int] = None, tag_id: Optional[int] = None):
        self.offset = offset
        self.tag_id = tag_id
        super().__init__(message)

    def to_directory_error(self) -> DirectoryError:
        """Convert this exception into a record suitable for Directory.add_error()."""
        return DirectoryError(self.kind, self.message, tag_id=self.tag_id, offset=self.offset)


class OutOfBoundsError(DecodeError):
    """Raised by ByteReader when a read extends past the buffer."""
    kind = ErrorKind.OUT_OF_BOUNDS

    def __init__(self, offset: int, length: int, buffer_length: int):
        self.length = length
        self.buffer_length = buffer_length
        super().__init__(
            f"Attempt to read {length} byte(s) at offset {offset} "
            f"from buffer of {buffer_length} byte(s)",
            offset=offset,
        )


class TruncatedIfdError(DecodeError):
    """Raised when an IFD entry table does not fit in the buffer."""
    kind = ErrorKind.TRUNCATED_IFD


class TruncatedValueError(DecodeError):
    """Raised when a tag's value region lies outside the buffer."""
    kind = ErrorKind.TRUNCATED_VALUE


class UnknownDataFormatError(DecodeError):
    """Raised for a TIFF format code outside the supported enumeration."""
    kind = ErrorKind.UNKNOWN_DATA_FORMAT


class UnparseableDateError(DecodeError):
    """Raised when a date/time string cannot be parsed."""
    kind = ErrorKind.UNPARSEABLE_DATE


class UnresolvedPointerError(DecodeError):
    """Raised when a pointer tag references an offset that fails validation."""
    kind = ErrorKind.UNRESOLVED_POINTER
