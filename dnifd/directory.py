# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Directory model

A Directory holds the tags of one decoded IFD, keyed by tag id, in the order
they were found. Values stay as raw bytes until queried through one of the
get_* methods, which coerce on demand and return None instead of raising.

Copyright 2025 DNAi inc.
"""

import weakref
from datetime import datetime, tzinfo
from typing import Any, Dict, Iterator, List, Optional

from dnifd.descriptors import DescriptorRef, DirectoryDescriptor, get_descriptor
from dnifd.exceptions import DirectoryError, UnparseableDateError
from dnifd.rational import Rational
from dnifd.tag_tables import (
    DATE_COMPANION_TAGS,
    TAG_GPS_DATE_STAMP,
    TAG_GPS_LATITUDE,
    TAG_GPS_LATITUDE_REF,
    TAG_GPS_LONGITUDE,
    TAG_GPS_LONGITUDE_REF,
    TAG_GPS_TIME_STAMP,
)
from dnifd.value_coercion import (
    GeoLocation,
    TagValue,
    decode_text,
    decode_value,
    parse_date,
    parse_gps_coordinate,
    parse_gps_datetime,
    to_bytes,
    to_float,
    to_int,
    to_int_list,
    to_rational,
    to_rational_list,
    to_string,
)


class Directory:
    """
    Tags decoded from one IFD.

    Tags are unique within a directory; setting a tag that already exists
    replaces its value. The parent link is weak: it is used for lookups
    such as finding the camera make of the IFD0 that owns a makernote, and
    never keeps the parent alive.
    """

    def __init__(self, descriptor: DescriptorRef, parent: Optional['Directory'] = None):
        """
        Initialize an empty directory.

        Args:
            descriptor: Descriptor record or registry key ('ifd0', 'gps', ...)
            parent: Directory holding the pointer that led here, if any
        """
        self.descriptor: DirectoryDescriptor = get_descriptor(descriptor)
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        self._tags: Dict[int, TagValue] = {}
        self._errors: List[DirectoryError] = []
        self.thumbnail_data: Optional[bytes] = None

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def key(self) -> str:
        return self.descriptor.key

    @property
    def parent(self) -> Optional['Directory']:
        """The parent directory, or None if there is none or it was discarded."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    def set_tag(self, tag: TagValue) -> None:
        self._tags[tag.tag_id] = tag

    def add_error(self, error: DirectoryError) -> None:
        """Record a decode problem. Identical records are only kept once."""
        if error not in self._errors:
            self._errors.append(error)

    @property
    def errors(self) -> List[DirectoryError]:
        return list(self._errors)

    @property
    def has_errors(self) -> bool:
        return bool(self._errors)

    def contains_tag(self, tag_id: int) -> bool:
        """True when the tag was present in the IFD, even if its value is unreadable."""
        return tag_id in self._tags

    def has_value(self, tag_id: int) -> bool:
        """True when the tag is present and its value bytes were resolved."""
        tag = self._tags.get(tag_id)
        return tag is not None and tag.has_value

    @property
    def tag_ids(self) -> List[int]:
        return list(self._tags)

    def get_tag(self, tag_id: int) -> Optional[TagValue]:
        return self._tags.get(tag_id)

    def __len__(self) -> int:
        return len(self._tags)

    def __iter__(self) -> Iterator[TagValue]:
        return iter(list(self._tags.values()))

    def __contains__(self, tag_id: object) -> bool:
        return tag_id in self._tags

    # ------------------------------------------------------------------
    # Naming
    # ------------------------------------------------------------------

    def get_tag_name(self, tag_id: int) -> str:
        return self.descriptor.get_tag_name(tag_id)

    def has_tag_name(self, tag_id: int) -> bool:
        return self.descriptor.has_tag_name(tag_id)

    # ------------------------------------------------------------------
    # Typed accessors
    # ------------------------------------------------------------------

    def get_object(self, tag_id: int) -> Any:
        """
        Return the value in its natural type.

        Text tags (STRING, plus UTF-16LE and character-coded tags declared
        by the descriptor) come back as str; see value_coercion.decode_value
        for the other formats.
        """
        tag = self._tags.get(tag_id)
        if tag is None:
            return None
        if tag_id in self.descriptor.utf16le_tags or tag_id in self.descriptor.encoded_text_tags:
            return self.get_string(tag_id)
        return decode_value(tag)

    def get_int(self, tag_id: int) -> Optional[int]:
        return to_int(self._tags.get(tag_id))

    def get_int_array(self, tag_id: int) -> Optional[List[int]]:
        return to_int_list(self._tags.get(tag_id))

    def get_float(self, tag_id: int) -> Optional[float]:
        return to_float(self._tags.get(tag_id))

    def get_rational(self, tag_id: int) -> Optional[Rational]:
        return to_rational(self._tags.get(tag_id))

    def get_rational_array(self, tag_id: int) -> Optional[List[Rational]]:
        return to_rational_list(self._tags.get(tag_id))

    def get_byte_array(self, tag_id: int) -> Optional[bytes]:
        return to_bytes(self._tags.get(tag_id))

    def get_string(self, tag_id: int, encoding: Optional[str] = None) -> Optional[str]:
        """
        Return the value as a string.

        Args:
            tag_id: Tag to read
            encoding: Decode text with this encoding instead of detecting it

        Returns:
            Text up to the first NUL, numbers joined by spaces, or None
        """
        tag = self._tags.get(tag_id)
        if tag is None:
            return None
        if encoding is not None and tag.raw is not None:
            return decode_text(tag.raw, encoding)
        return to_string(
            tag,
            utf16le=tag_id in self.descriptor.utf16le_tags,
            encoded=tag_id in self.descriptor.encoded_text_tags,
        )

    def get_date(
        self,
        tag_id: int,
        subsecond: Optional[str] = None,
        offset: Optional[str] = None,
        default_tz: Optional[tzinfo] = None
    ) -> Optional[datetime]:
        """
        Parse a date/time tag.

        A tag that is present but does not parse records an UNPARSEABLE_DATE
        error on this directory.

        Args:
            tag_id: Tag holding the date string
            subsecond: Fraction-of-second digits
            offset: UTC offset "[+-]hh:mm"
            default_tz: Zone assumed when no offset is known

        Returns:
            Aware datetime, or None
        """
        value = self.get_string(tag_id)
        if value is None:
            return None
        result = parse_date(value, subsecond, offset, default_tz)
        if result is None:
            self.add_error(
                UnparseableDateError(f"Unable to parse date value {value!r}", tag_id=tag_id).to_directory_error()
            )
        return result

    def get_datetime(self, tag_id: int, default_tz: Optional[tzinfo] = None) -> Optional[datetime]:
        """
        Parse a date tag together with its SubSecTime and OffsetTime companions.

        The primary tag and its companions are each looked up in this directory
        first and then up the parent chain, so calling this on the Exif SubIFD
        finds ModifyDate in IFD0 and SubSecTime/OffsetTime in the SubIFD.

        Args:
            tag_id: DateTime (0x0132), DateTimeOriginal (0x9003) or
                DateTimeDigitized (0x9004); other tags are parsed without companions
            default_tz: Zone assumed when no OffsetTime tag is present

        Returns:
            Aware datetime, or None
        """
        owner = self._find_owner(tag_id)
        if owner is None:
            return None

        subsecond = offset = None
        companions = DATE_COMPANION_TAGS.get(tag_id)
        if companions is not None:
            subsecond = self.resolve_string(companions[0])
            offset = self.resolve_string(companions[1])
        return owner.get_date(tag_id, subsecond, offset, default_tz)

    def get_geo_location(self) -> Optional[GeoLocation]:
        """
        Combine the GPS latitude and longitude tags of a GPS directory.

        Returns:
            Signed decimal degrees, or None unless both coordinates have three
            finite components and a Ref tag
        """
        latitude = parse_gps_coordinate(
            self.get_rational_array(TAG_GPS_LATITUDE), self.get_string(TAG_GPS_LATITUDE_REF)
        )
        longitude = parse_gps_coordinate(
            self.get_rational_array(TAG_GPS_LONGITUDE), self.get_string(TAG_GPS_LONGITUDE_REF)
        )
        if latitude is None or longitude is None:
            return None
        return GeoLocation(latitude, longitude)

    def get_gps_datetime(self) -> Optional[datetime]:
        """Return the UTC time of the GPS fix from GPSDateStamp and GPSTimeStamp."""
        return parse_gps_datetime(self.get_string(TAG_GPS_DATE_STAMP), self.get_rational_array(TAG_GPS_TIME_STAMP))

    # ------------------------------------------------------------------
    # Hierarchical lookup
    # ------------------------------------------------------------------

    def _find_owner(self, tag_id: int) -> Optional['Directory']:
        directory = self
        while directory is not None:
            if tag_id in directory._tags:
                return directory
            directory = directory.parent
        return None

    def resolve(self, tag_id: int) -> Optional[TagValue]:
        """Look up a tag here, then in each ancestor in turn."""
        owner = self._find_owner(tag_id)
        if owner is None:
            return None
        return owner._tags[tag_id]

    def resolve_string(self, tag_id: int) -> Optional[str]:
        owner = self._find_owner(tag_id)
        if owner is None:
            return None
        return owner.get_string(tag_id)

    def __repr__(self) -> str:
        return f"<Directory {self.name}: {len(self._tags)} tag(s), {len(self._errors)} error(s)>"
