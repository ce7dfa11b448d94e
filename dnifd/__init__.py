# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
DNIFD - TIFF/IFD metadata decoding in pure Python

Decodes the Image File Directory structures that carry EXIF metadata in
JPEG, TIFF and camera RAW files: IFD0 and IFD1, the Exif SubIFD, GPS and
Interoperability IFDs, and vendor makernotes. Malformed structures never
abort a decode; problems are recorded on the affected directory.

Copyright 2025 DNAi inc.
"""

import logging

__version__ = "0.1.0"
__author__ = "DNAi inc."

from dnifd.byte_reader import BIG_ENDIAN, LITTLE_ENDIAN, ByteReader
from dnifd.config import ReaderConfig
from dnifd.data_format import DataFormat
from dnifd.descriptors import DirectoryDescriptor, get_descriptor
from dnifd.directory import Directory
from dnifd.exceptions import (
    DecodeError,
    DirectoryError,
    DNIFDError,
    ErrorKind,
    MetadataReadError,
    OutOfBoundsError,
)
from dnifd.exif_reader import ExifReader, read_file, read_metadata
from dnifd.ifd_reader import IfdReader
from dnifd.metadata import Metadata
from dnifd.rational import Rational
from dnifd.value_coercion import GeoLocation, TagValue, parse_date

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'BIG_ENDIAN',
    'LITTLE_ENDIAN',
    'ByteReader',
    'DataFormat',
    'DecodeError',
    'Directory',
    'DirectoryDescriptor',
    'DirectoryError',
    'DNIFDError',
    'ErrorKind',
    'ExifReader',
    'GeoLocation',
    'IfdReader',
    'Metadata',
    'MetadataReadError',
    'OutOfBoundsError',
    'Rational',
    'ReaderConfig',
    'TagValue',
    'get_descriptor',
    'parse_date',
    'read_file',
    'read_metadata',
]
