# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TIFF header front end

Reads the 8-byte TIFF header ("II"/"MM", magic number, first IFD offset),
optionally preceded by the "Exif\\0\\0" identifier of a JPEG APP1 segment,
and hands the first IFD to IfdReader.

Copyright 2025 DNAi inc.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from dnifd.byte_reader import BIG_ENDIAN, LITTLE_ENDIAN, BufferLike, ByteReader
from dnifd.config import ReaderConfig
from dnifd.exceptions import MetadataReadError
from dnifd.ifd_reader import IfdReader
from dnifd.metadata import Metadata

logger = logging.getLogger(__name__)

EXIF_PREAMBLE = b'Exif\x00\x00'
TIFF_HEADER_SIZE = 8

STANDARD_TIFF_MARKER = 0x002A
OLYMPUS_RAW_TIFF_MARKER = 0x4F52  # ORF
OLYMPUS_RAW_TIFF_MARKER_2 = 0x5352  # ORF
PANASONIC_RAW_TIFF_MARKER = 0x0055  # RW2

VALID_TIFF_MARKERS = frozenset({
    STANDARD_TIFF_MARKER,
    OLYMPUS_RAW_TIFF_MARKER,
    OLYMPUS_RAW_TIFF_MARKER_2,
    PANASONIC_RAW_TIFF_MARKER,
})


class ExifReader:
    """Decodes a TIFF-structured metadata stream into a Metadata aggregate."""

    def __init__(self, config: Optional[ReaderConfig] = None):
        self.config = config if config is not None else ReaderConfig()

    def extract(
        self,
        data: BufferLike,
        metadata: Optional[Metadata] = None,
        tiff_header_offset: Optional[int] = None
    ) -> Metadata:
        """
        Parse the TIFF header and decode all IFDs.

        Args:
            data: Buffer holding the stream
            metadata: Aggregate to add directories to (a new one by default)
            tiff_header_offset: Position of the TIFF header. When omitted, the
                header is expected at 0 or right after an "Exif\\0\\0" preamble.

        Returns:
            The metadata aggregate

        Raises:
            MetadataReadError: If there is no valid TIFF header
        """
        if metadata is None:
            metadata = Metadata()

        reader = ByteReader(data)
        if tiff_header_offset is None:
            tiff_header_offset = len(EXIF_PREAMBLE) if reader.starts_with(0, EXIF_PREAMBLE) else 0

        if not reader.is_valid_range(tiff_header_offset, TIFF_HEADER_SIZE):
            raise MetadataReadError(
                f"Data too short for a TIFF header at offset {tiff_header_offset} ({reader.length} bytes)"
            )

        byte_order_marker = reader.read_bytes(tiff_header_offset, 2)
        if byte_order_marker == b'MM':
            reader = reader.with_byte_order(BIG_ENDIAN)
        elif byte_order_marker == b'II':
            reader = reader.with_byte_order(LITTLE_ENDIAN)
        else:
            raise MetadataReadError(f"Unclear distinction between Motorola/Intel byte ordering: {byte_order_marker!r}")

        marker = reader.read_u16(tiff_header_offset + 2)
        if marker not in VALID_TIFF_MARKERS:
            raise MetadataReadError(f"Unexpected TIFF marker: 0x{marker:X}")

        first_ifd_offset = tiff_header_offset + reader.read_u32(tiff_header_offset + 4)
        if first_ifd_offset >= reader.length - 1:
            # Seen with some broken writers; the first IFD normally follows the header
            logger.warning(
                "First IFD offset %d is beyond the end of the data, assuming %d",
                first_ifd_offset, tiff_header_offset + TIFF_HEADER_SIZE,
            )
            first_ifd_offset = tiff_header_offset + TIFF_HEADER_SIZE

        return self._decode(reader, metadata, first_ifd_offset, tiff_header_offset)

    def read_ifds(
        self,
        data: BufferLike,
        first_ifd_offset: int,
        byte_order: str,
        tiff_header_offset: int = 0,
        metadata: Optional[Metadata] = None
    ) -> Metadata:
        """
        Decode IFDs for a caller that has already parsed the TIFF header.

        Args:
            data: Buffer holding the stream
            first_ifd_offset: Absolute offset of IFD0
            byte_order: '>' (MM) or '<' (II)
            tiff_header_offset: Absolute offset that value offsets are relative to
            metadata: Aggregate to add directories to (a new one by default)

        Returns:
            The metadata aggregate
        """
        if metadata is None:
            metadata = Metadata()
        return self._decode(ByteReader(data, byte_order), metadata, first_ifd_offset, tiff_header_offset)

    def _decode(self, reader: ByteReader, metadata: Metadata, first_ifd_offset: int, tiff_header_offset: int) -> Metadata:
        logger.debug(
            "Decoding %s-endian TIFF stream of %d bytes, IFD0 at %d",
            'big' if reader.is_motorola else 'little', reader.length, first_ifd_offset,
        )
        IfdReader(reader, metadata, tiff_header_offset, self.config).decode(first_ifd_offset)
        return metadata


def read_metadata(data: BufferLike, config: Optional[ReaderConfig] = None) -> Metadata:
    """Decode a TIFF-structured buffer (optionally starting with "Exif\\0\\0")."""
    return ExifReader(config).extract(data)


def read_file(path: Union[str, Path], config: Optional[ReaderConfig] = None) -> Metadata:
    """
    Read a file holding a TIFF-structured stream (TIFF, DNG, ORF, RW2 or a raw Exif blob).

    Raises:
        MetadataReadError: If the file cannot be read or has no TIFF header
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise MetadataReadError(f"Cannot read {path}: {e}") from e
    return read_metadata(data, config)
