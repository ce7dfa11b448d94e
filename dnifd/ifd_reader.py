# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
IFD decoder

Walks TIFF Image File Directories and builds the Directory graph: one
Directory per IFD, child directories for pointer tags (Exif SubIFD, GPS,
Interop), sibling directories for the next-IFD chain (IFD1 thumbnails) and
vendor makernote directories located through the makernote rule table.

Decoding never raises for malformed input. Problems with a single entry are
recorded on the directory and the entry is skipped or stored without a
value; problems with an IFD table abort only that IFD and its subtree.

Copyright 2025 DNAi inc.
"""

import logging
import struct
from typing import Optional, Set

from dnifd.byte_reader import ByteReader
from dnifd.config import ReaderConfig
from dnifd.data_format import DataFormat
from dnifd.descriptors import IFD0, THUMBNAIL, DescriptorRef
from dnifd.directory import Directory
from dnifd.exceptions import (
    DecodeError,
    DirectoryError,
    ErrorKind,
    OutOfBoundsError,
    TruncatedIfdError,
    TruncatedValueError,
    UnknownDataFormatError,
    UnresolvedPointerError,
)
from dnifd.makernotes import MakernoteLayout, resolve_makernote_layout
from dnifd.metadata import Metadata
from dnifd.tag_tables import (
    TAG_COMPRESSION,
    TAG_MAKE,
    TAG_THUMBNAIL_LENGTH,
    TAG_THUMBNAIL_OFFSET,
)
from dnifd.value_coercion import TagValue

logger = logging.getLogger(__name__)

ENTRY_SIZE = 12  # tag id, format, count, value/offset
MAX_INLINE_SIZE = 4


class IfdReader:
    """
    Decodes IFDs from one buffer into a Metadata aggregate.

    An IfdReader remembers every IFD offset it has decoded, so a pointer to
    an IFD that was already visited (a cycle, or two pointers to the same
    table) is reported instead of being decoded twice. Use one IfdReader per
    stream.
    """

    def __init__(
        self,
        reader: ByteReader,
        metadata: Metadata,
        tiff_header_offset: int = 0,
        config: Optional[ReaderConfig] = None
    ):
        """
        Initialize the decoder.

        Args:
            reader: Reader over the whole buffer, in the stream's byte order
            metadata: Aggregate receiving decoded directories
            tiff_header_offset: Absolute offset of the TIFF header; value
                offsets and pointers are relative to it
            config: Decode options (defaults to ReaderConfig())
        """
        self.reader = reader
        self.metadata = metadata
        self.tiff_header_offset = tiff_header_offset
        self.config = config if config is not None else ReaderConfig()
        self._visited: Set[int] = set()

    def decode(
        self,
        ifd_offset: int,
        descriptor: DescriptorRef = IFD0,
        parent: Optional[Directory] = None
    ) -> Directory:
        """
        Decode the IFD at ifd_offset and everything reachable from it.

        Args:
            ifd_offset: Absolute offset of the IFD in the buffer
            descriptor: Type of the directory to build
            parent: Parent for the new directory, if any

        Returns:
            The directory for ifd_offset. Problems are recorded on it (and on
            the directories below it) rather than raised.
        """
        directory = Directory(descriptor, parent)
        self.metadata.add_directory(directory)

        reason = self._check_ifd_offset(ifd_offset, 0, self.reader)
        if reason is not None:
            logger.warning("Not decoding %s: %s", directory.name, reason)
            directory.add_error(UnresolvedPointerError(reason, offset=ifd_offset).to_directory_error())
        else:
            self._decode_chain(directory, self.reader, ifd_offset, self.tiff_header_offset, 0)

        if self.config.store_thumbnail_bytes:
            self._store_thumbnail()
        return directory

    def _check_ifd_offset(self, ifd_offset: int, depth: int, reader: ByteReader) -> Optional[str]:
        """Return why an IFD offset must not be followed, or None if it may."""
        if ifd_offset < 0 or ifd_offset >= reader.length:
            return f"IFD offset {ifd_offset} lies outside the data ({reader.length} bytes)"
        if ifd_offset in self._visited:
            return f"IFD at offset {ifd_offset} has already been decoded"
        if depth > self.config.max_ifd_depth:
            return f"IFD nesting exceeds {self.config.max_ifd_depth} levels"
        return None

    def _decode_chain(
        self,
        directory: Directory,
        reader: ByteReader,
        ifd_offset: int,
        base_offset: int,
        depth: int
    ) -> None:
        """Decode an IFD, then each follower IFD linked after it."""
        while True:
            self._visited.add(ifd_offset)
            try:
                next_offset = self._process_ifd(directory, reader, ifd_offset, base_offset, depth)
            except DecodeError as error:
                logger.warning("Aborted %s at offset %d: %s", directory.name, ifd_offset, error.message)
                directory.add_error(error.to_directory_error())
                return

            if next_offset is None:
                return
            follower = Directory(directory.descriptor.follower, parent=directory.parent)
            self.metadata.add_directory(follower)
            directory, ifd_offset = follower, next_offset

    def _process_ifd(
        self,
        directory: Directory,
        reader: ByteReader,
        ifd_offset: int,
        base_offset: int,
        depth: int
    ) -> Optional[int]:
        """
        Decode one IFD table into directory.

        Returns:
            Absolute offset of the follower IFD to decode next, or None

        Raises:
            TruncatedIfdError: If the entry table does not fit in the buffer
            OutOfBoundsError: If a read inside the table fails
        """
        if not reader.is_valid_range(ifd_offset, 2):
            raise TruncatedIfdError(
                f"IFD entry count at offset {ifd_offset} lies outside the data", offset=ifd_offset
            )
        entry_count = reader.read_u16(ifd_offset)

        # Some software rewrites the byte order of a file but misses IFDs such
        # as makernotes. No real IFD has more than 255 entries.
        if entry_count > 0xFF and (entry_count & 0xFF) == 0:
            entry_count >>= 8
            reader = reader.flipped()
            logger.debug("IFD at offset %d looks byte-swapped, reading it with %r", ifd_offset, reader.endian)

        table_end = ifd_offset + 2 + ENTRY_SIZE * entry_count
        if table_end > reader.length:
            raise TruncatedIfdError(
                f"IFD at offset {ifd_offset} declares {entry_count} entries "
                f"but the data ends at {reader.length}",
                offset=ifd_offset,
            )

        invalid_formats = 0
        for index in range(entry_count):
            entry_offset = ifd_offset + 2 + index * ENTRY_SIZE
            tag_id = reader.read_u16(entry_offset)
            format_code = reader.read_u16(entry_offset + 2)
            component_count = reader.read_u32(entry_offset + 4)

            data_format = DataFormat.from_code(format_code)
            if data_format is None:
                logger.debug("Invalid format code %d for tag 0x%04X in %s", format_code, tag_id, directory.name)
                directory.add_error(UnknownDataFormatError(
                    f"Invalid TIFF tag format code {format_code}", offset=entry_offset, tag_id=tag_id
                ).to_directory_error())
                invalid_formats += 1
                if invalid_formats > self.config.max_invalid_format_codes:
                    # The table is most likely misaligned
                    logger.warning("Stopping %s: too many invalid format codes", directory.name)
                    directory.add_error(UnknownDataFormatError(
                        "Stopping processing as too many errors seen in TIFF IFD", offset=ifd_offset
                    ).to_directory_error())
                    return None
                continue

            tag = self._read_entry(directory, reader, entry_offset, tag_id, data_format, component_count, base_offset)
            directory.set_tag(tag)
            if not tag.has_value:
                continue

            child_key = directory.descriptor.pointer_tags.get(tag_id)
            if child_key is not None:
                self._follow_pointer(directory, reader, tag, child_key, base_offset, depth)
            elif tag_id == directory.descriptor.makernote_tag and self.config.follow_makernotes:
                self._process_makernote(directory, reader, tag, base_offset, depth)

        return self._next_ifd_offset(directory, reader, ifd_offset, table_end, base_offset, depth)

    def _read_entry(
        self,
        directory: Directory,
        reader: ByteReader,
        entry_offset: int,
        tag_id: int,
        data_format: DataFormat,
        component_count: int,
        base_offset: int
    ) -> TagValue:
        """Resolve the value bytes of one entry; raw is None if they are out of range."""
        byte_count = component_count * data_format.size
        if byte_count <= MAX_INLINE_SIZE:
            value_offset = entry_offset + 8
        else:
            value_offset = base_offset + reader.read_u32(entry_offset + 8)

        raw = None
        if reader.is_valid_range(value_offset, byte_count):
            raw = reader.read_bytes(value_offset, byte_count)
        else:
            logger.debug("Value of tag 0x%04X (%d bytes at %d) exceeds the data", tag_id, byte_count, value_offset)
            directory.add_error(TruncatedValueError(
                f"Value of {byte_count} byte(s) at offset {value_offset} exceeds the data",
                offset=value_offset,
                tag_id=tag_id,
            ).to_directory_error())

        return TagValue(
            tag_id=tag_id,
            data_format=data_format,
            component_count=component_count,
            raw=raw,
            endian=reader.endian,
            value_offset=value_offset,
        )

    def _follow_pointer(
        self,
        directory: Directory,
        reader: ByteReader,
        tag: TagValue,
        child_key: str,
        base_offset: int,
        depth: int
    ) -> None:
        """Decode the child IFD(s) a pointer tag refers to."""
        if tag.data_format.size != 4:
            directory.add_error(UnresolvedPointerError(
                f"Pointer tag has non-offset format {tag.data_format.name}", tag_id=tag.tag_id
            ).to_directory_error())
            return

        for index in range(tag.component_count):
            relative = struct.unpack_from(f'{tag.endian}I', tag.raw, index * 4)[0]
            child_offset = base_offset + relative
            reason = self._check_ifd_offset(child_offset, depth + 1, reader)
            if reason is not None:
                logger.debug("Unresolved pointer tag 0x%04X in %s: %s", tag.tag_id, directory.name, reason)
                directory.add_error(UnresolvedPointerError(
                    reason, offset=child_offset, tag_id=tag.tag_id
                ).to_directory_error())
                continue

            child = Directory(child_key, parent=directory)
            self.metadata.add_directory(child)
            self._decode_chain(child, reader, child_offset, base_offset, depth + 1)

    def _camera_make(self, directory: Directory) -> Optional[str]:
        make = directory.resolve_string(TAG_MAKE)
        if make is None:
            ifd0 = self.metadata.get_first_directory_of_type(IFD0)
            if ifd0 is not None:
                make = ifd0.get_string(TAG_MAKE)
        return make

    def _process_makernote(
        self,
        directory: Directory,
        reader: ByteReader,
        tag: TagValue,
        base_offset: int,
        depth: int
    ) -> None:
        """Identify a makernote block and decode it as a child directory."""
        make = self._camera_make(directory)
        try:
            layout = resolve_makernote_layout(reader, tag.value_offset, base_offset, make)
        except OutOfBoundsError as error:
            directory.add_error(error.to_directory_error())
            return

        if layout is None:
            logger.debug("Makernote not recognised (make %r)", make)
            return
        if not layout.supported:
            logger.debug("Ignoring unsupported %s makernote", layout.rule.name)
            directory.add_error(DirectoryError(
                ErrorKind.UNSUPPORTED_MAKERNOTE,
                f"Unsupported {layout.rule.name} makernote data ignored",
                tag_id=tag.tag_id,
                offset=tag.value_offset,
            ))
            return
        if layout.rule.fields:
            self._read_fixed_fields(directory, layout)
            return

        reason = self._check_ifd_offset(layout.ifd_offset, depth + 1, layout.reader)
        if reason is not None:
            directory.add_error(UnresolvedPointerError(
                f"{layout.rule.name} makernote: {reason}", offset=layout.ifd_offset, tag_id=tag.tag_id
            ).to_directory_error())
            return

        logger.debug("Decoding %s makernote at offset %d", layout.rule.name, layout.ifd_offset)
        child = Directory(layout.descriptor, parent=directory)
        self.metadata.add_directory(child)
        self._decode_chain(child, layout.reader, layout.ifd_offset, layout.base_offset, depth + 1)

    def _read_fixed_fields(self, directory: Directory, layout: MakernoteLayout) -> None:
        """Build a makernote directory from values stored at fixed positions."""
        logger.debug("Decoding %s makernote fields at offset %d", layout.rule.name, layout.ifd_offset)
        child = Directory(layout.descriptor, parent=directory)
        self.metadata.add_directory(child)

        reader = layout.reader
        for field in layout.rule.fields:
            value_offset = layout.ifd_offset + field.position
            if not reader.is_valid_range(value_offset, field.size):
                child.add_error(TruncatedValueError(
                    f"Error processing {layout.rule.name} makernote data: {field.size} byte(s) "
                    f"at offset {value_offset} exceed the data",
                    offset=value_offset,
                    tag_id=field.position,
                ).to_directory_error())
                return
            child.set_tag(TagValue(
                tag_id=field.position,
                data_format=field.data_format,
                component_count=field.count,
                raw=reader.read_bytes(value_offset, field.size),
                endian=reader.endian,
                value_offset=value_offset,
            ))

    def _next_ifd_offset(
        self,
        directory: Directory,
        reader: ByteReader,
        ifd_offset: int,
        link_offset: int,
        base_offset: int,
        depth: int
    ) -> Optional[int]:
        """Read and validate the next-IFD link that follows an entry table."""
        # Makernotes frequently omit the link
        if not reader.is_valid_range(link_offset, 4):
            return None
        relative = reader.read_u32(link_offset)
        if relative == 0:
            return None

        follower = directory.descriptor.follower
        if follower is None:
            logger.debug("Ignoring next-IFD link in %s", directory.name)
            return None

        next_offset = base_offset + relative
        if next_offset >= reader.length:
            reason = f"Next IFD offset {next_offset} lies outside the data ({reader.length} bytes)"
        elif next_offset < ifd_offset:
            reason = f"Next IFD offset {next_offset} points before the current IFD at {ifd_offset}"
        else:
            reason = self._check_ifd_offset(next_offset, depth, reader)
        if reason is not None:
            logger.debug("Not following next-IFD link of %s: %s", directory.name, reason)
            directory.add_error(UnresolvedPointerError(reason, offset=next_offset).to_directory_error())
            return None
        return next_offset

    def _store_thumbnail(self) -> None:
        """Copy the JPEG thumbnail referenced by the first complete IFD1."""
        for directory in self.metadata.get_directories_of_type(THUMBNAIL):
            if directory.thumbnail_data is not None:
                return
            if not directory.contains_tag(TAG_COMPRESSION):
                continue
            offset = directory.get_int(TAG_THUMBNAIL_OFFSET)
            length = directory.get_int(TAG_THUMBNAIL_LENGTH)
            if offset is None or length is None:
                continue

            try:
                directory.thumbnail_data = self.reader.read_bytes(self.tiff_header_offset + offset, length)
            except OutOfBoundsError as error:
                logger.debug("Invalid thumbnail data specification: %s", error.message)
                directory.add_error(DirectoryError(
                    ErrorKind.OUT_OF_BOUNDS,
                    f"Invalid thumbnail data specification: {error.message}",
                    tag_id=TAG_THUMBNAIL_OFFSET,
                    offset=error.offset,
                ))
            return
