# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Value coercion for stored tag values

Directories keep each tag as the raw bytes found in the file together with
its declared data format. The functions in this module interpret those bytes
on demand as integers, rationals, floats, strings, byte arrays or dates.
Every coercion fails softly: a missing value or a type mismatch yields None.

Copyright 2025 DNAi inc.
"""

import math
import re
import struct
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any, List, Optional

import chardet

from dnifd.data_format import DataFormat
from dnifd.rational import Rational

# Accepted layouts for date/time strings, tried in order. This covers EXIF
# ("2020:01:02 03:04:05"), XMP/ISO variants and the IPTC compact form.
DATE_FORMATS = (
    '%Y:%m:%d %H:%M:%S',
    '%Y:%m:%d %H:%M',
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%d %H:%M',
    '%Y.%m.%d %H:%M:%S',
    '%Y.%m.%d %H:%M',
    '%Y-%m-%dT%H:%M:%S',
    '%Y-%m-%dT%H:%M',
    '%Y-%m-%d',
    '%Y-%m',
    '%Y%m%d',
    '%Y',
)

SUBSECOND_PATTERN = re.compile(r'(\d\d:\d\d:\d\d)(\.\d+)')
TIME_ZONE_SUFFIX_PATTERN = re.compile(r'(Z|[+-]\d\d:\d\d)$')
OFFSET_PATTERN = re.compile(r'^([+-])(\d\d):(\d\d)$')

# Character code prefixes of UserComment-style UNDEFINED text values
ENCODED_TEXT_PREFIXES = {
    b'ASCII\x00\x00\x00': 'ascii',
    b'UNICODE\x00': 'utf-16',
    b'JIS\x00\x00\x00\x00\x00': 'iso2022_jp',
    b'\x00\x00\x00\x00\x00\x00\x00\x00': None,
}


@dataclass(frozen=True)
class TagValue:
    """
    A tag as stored in a directory.

    Attributes:
        tag_id: 16-bit tag identifier
        data_format: Declared TIFF data format
        component_count: Number of components declared by the entry
        raw: Value bytes, or None when the value region could not be read
        endian: Byte order used to interpret raw ('>' or '<')
        value_offset: Absolute offset of the value bytes in the source buffer
    """
    tag_id: int
    data_format: DataFormat
    component_count: int
    raw: Optional[bytes]
    endian: str = '>'
    value_offset: Optional[int] = None

    @property
    def has_value(self) -> bool:
        return self.raw is not None

    @property
    def byte_count(self) -> int:
        return self.component_count * self.data_format.size


def _components(tag: TagValue) -> Optional[List[Any]]:
    """Unpack all components of a numeric tag."""
    if tag.raw is None:
        return None

    data_format = tag.data_format
    count = min(tag.component_count, len(tag.raw) // data_format.size)

    if data_format.is_rational:
        code = 'i' if data_format == DataFormat.SRATIONAL else 'I'
        values = struct.unpack(f'{tag.endian}{count * 2}{code}', tag.raw[:count * 8])
        return [Rational(values[i], values[i + 1]) for i in range(0, len(values), 2)]

    code = data_format.struct_code
    if code is None:
        # STRING and UNDEFINED: one component per byte
        return list(tag.raw[:count])
    return list(struct.unpack(f'{tag.endian}{count}{code}', tag.raw[:count * data_format.size]))


def decode_value(tag: Optional[TagValue]) -> Any:
    """
    Interpret a tag value in its natural Python type.

    Returns:
        str for STRING, bytes for UNDEFINED, a single int/float/Rational for
        one-component numeric values, a list for multi-component values,
        or None when the value is unavailable
    """
    if tag is None or tag.raw is None:
        return None
    if tag.data_format == DataFormat.STRING:
        return decode_text(tag.raw)
    if tag.data_format == DataFormat.UNDEFINED:
        return tag.raw

    values = _components(tag)
    if not values:
        return None
    if len(values) == 1:
        return values[0]
    return values


def to_int(tag: Optional[TagValue]) -> Optional[int]:
    """Return the first component as an int."""
    if tag is None or tag.raw is None:
        return None

    data_format = tag.data_format
    if data_format == DataFormat.STRING:
        try:
            return int(decode_text(tag.raw).strip())
        except ValueError:
            return None
    if data_format == DataFormat.UNDEFINED:
        if 1 <= len(tag.raw) <= 4:
            return int.from_bytes(tag.raw, 'big' if tag.endian == '>' else 'little')
        return None

    values = _components(tag)
    if not values:
        return None
    value = values[0]
    if isinstance(value, Rational):
        return None if value.denominator == 0 else int(value)
    if isinstance(value, float):
        if value != value or value in (float('inf'), float('-inf')):
            return None
        return int(value)
    return value


def to_int_list(tag: Optional[TagValue]) -> Optional[List[int]]:
    """Return all components of an integer or byte-valued tag."""
    if tag is None or tag.raw is None:
        return None
    if tag.data_format == DataFormat.UNDEFINED:
        return list(tag.raw)
    if not tag.data_format.is_integral:
        return None
    return _components(tag)


def to_float(tag: Optional[TagValue]) -> Optional[float]:
    """Return the first component as a float."""
    if tag is None or tag.raw is None:
        return None
    if tag.data_format == DataFormat.STRING:
        try:
            return float(decode_text(tag.raw).strip())
        except ValueError:
            return None
    if tag.data_format == DataFormat.UNDEFINED:
        return None
    values = _components(tag)
    if not values:
        return None
    return float(values[0])


def to_float_list(tag: Optional[TagValue]) -> Optional[List[float]]:
    if tag is None or tag.raw is None:
        return None
    if tag.data_format in (DataFormat.STRING, DataFormat.UNDEFINED):
        return None
    return [float(value) for value in _components(tag)]


def to_rational(tag: Optional[TagValue]) -> Optional[Rational]:
    """Return the first component as a Rational; integers become n/1."""
    if tag is None or tag.raw is None:
        return None
    if not (tag.data_format.is_rational or tag.data_format.is_integral):
        return None
    values = _components(tag)
    if not values:
        return None
    value = values[0]
    if isinstance(value, Rational):
        return value
    return Rational(value, 1)


def to_rational_list(tag: Optional[TagValue]) -> Optional[List[Rational]]:
    if tag is None or tag.raw is None or not tag.data_format.is_rational:
        return None
    return _components(tag)


def to_bytes(tag: Optional[TagValue]) -> Optional[bytes]:
    """Return the raw value bytes regardless of format."""
    if tag is None:
        return None
    return tag.raw


def to_string(tag: Optional[TagValue], utf16le: bool = False, encoded: bool = False) -> Optional[str]:
    """
    Render a tag value as a string.

    Args:
        tag: Stored tag value
        utf16le: Decode the bytes as UTF-16LE (Windows XP tags)
        encoded: The value starts with an 8-byte character code (UserComment)

    Returns:
        Decoded string, numbers joined by spaces, or None
    """
    if tag is None or tag.raw is None:
        return None
    if utf16le:
        return decode_utf16le(tag.raw)
    if encoded and tag.data_format in (DataFormat.UNDEFINED, DataFormat.STRING):
        return decode_encoded_text(tag.raw, tag.endian)
    if tag.data_format in (DataFormat.STRING, DataFormat.UNDEFINED):
        return decode_text(tag.raw)

    values = _components(tag)
    if not values:
        return ''
    if tag.data_format.is_rational:
        if len(values) == 1:
            return values[0].to_simple_string(True)
        return ' '.join(str(value) for value in values)
    if tag.data_format in (DataFormat.SINGLE, DataFormat.DOUBLE):
        return ' '.join(format_float(value) for value in values)
    return ' '.join(str(value) for value in values)


def format_float(value: float) -> str:
    """Format a float with at most three decimals and no trailing zeros."""
    text = f"{value:.3f}".rstrip('0').rstrip('.')
    return '0' if text == '-0' else text


def decode_text(raw: bytes, encoding: Optional[str] = None) -> str:
    """
    Decode a NUL-terminated byte string.

    Pure ASCII is decoded as such; other data is tried as UTF-8 (EXIF 3.0
    allows it), then with the encoding guessed by chardet, then Latin-1.

    Args:
        raw: Stored bytes
        encoding: Force a specific encoding

    Returns:
        Decoded text up to the first NUL
    """
    nul = raw.find(b'\x00')
    if nul >= 0:
        raw = raw[:nul]

    if encoding:
        return raw.decode(encoding, errors='replace')

    try:
        return raw.decode('ascii')
    except UnicodeDecodeError:
        pass
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError:
        pass

    detected = chardet.detect(raw).get('encoding')
    if detected:
        try:
            return raw.decode(detected)
        except (UnicodeDecodeError, LookupError):
            pass
    return raw.decode('latin-1')


def decode_utf16le(raw: bytes) -> str:
    """Decode UTF-16LE text such as the Windows XP title/comment tags."""
    if len(raw) % 2:
        raw = raw[:-1]
    return raw.decode('utf-16-le', errors='replace').rstrip('\x00')


def decode_encoded_text(raw: bytes, endian: str = '>') -> str:
    """
    Decode text prefixed by an 8-byte character code.

    Used by UserComment, GPSProcessingMethod and GPSAreaInformation.
    Unknown prefixes fall back to plain text decoding of the whole value.
    """
    prefix = raw[:8]
    if len(raw) < 8 or prefix not in ENCODED_TEXT_PREFIXES:
        return decode_text(raw)

    body = raw[8:]
    encoding = ENCODED_TEXT_PREFIXES[prefix]
    if encoding == 'utf-16':
        if len(body) % 2:
            body = body[:-1]
        codec = 'utf-16-be' if endian == '>' else 'utf-16-le'
        return body.decode(codec, errors='replace').rstrip('\x00').strip()
    return decode_text(body, encoding).strip()


def parse_time_zone_offset(value: Optional[str]) -> Optional[tzinfo]:
    """
    Parse an EXIF OffsetTime value such as "+09:00" or "-05:30".

    Returns:
        A fixed-offset timezone, or None when value is empty or malformed
    """
    if not value:
        return None
    text = value.strip()
    if text == 'Z':
        return timezone.utc

    match = OFFSET_PATTERN.match(text)
    if not match:
        return None
    sign, hours, minutes = match.group(1), int(match.group(2)), int(match.group(3))
    if hours > 23 or minutes > 59:
        return None
    delta = timedelta(hours=hours, minutes=minutes)
    return timezone(-delta if sign == '-' else delta)


def _parse_subsecond(value: Optional[str]) -> Optional[int]:
    """Convert a fraction-of-second digit string into microseconds."""
    if value is None:
        return None
    digits = value.strip()
    if not re.fullmatch(r'[0-9]+', digits):
        return None
    return int((digits + '000000')[:6])


def parse_date(
    value: Optional[str],
    subsecond: Optional[str] = None,
    offset: Optional[str] = None,
    default_tz: Optional[tzinfo] = None
) -> Optional[datetime]:
    """
    Parse a date/time string into an aware datetime.

    Sub-seconds embedded in value take precedence over subsecond, and a
    trailing "Z" or "+hh:mm" in value takes precedence over offset. offset
    in turn takes precedence over default_tz. With no zone information at
    all the wall-clock fields are taken as UTC.

    Args:
        value: Primary date/time string
        subsecond: Fraction-of-second digits (SubSecTime* tags)
        offset: UTC offset string "[+-]hh:mm" (OffsetTime* tags)
        default_tz: Zone to assume when no offset is available

    Returns:
        Aware datetime, or None if value does not parse as a date
    """
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None

    match = SUBSECOND_PATTERN.search(text)
    if match:
        subsecond = match.group(2)[1:]
        text = SUBSECOND_PATTERN.sub(r'\1', text)

    tz = None
    match = TIME_ZONE_SUFFIX_PATTERN.search(text)
    if match:
        tz = parse_time_zone_offset(match.group(1))
        text = text[:match.start()].rstrip()
    if tz is None:
        tz = parse_time_zone_offset(offset)
    if tz is None:
        tz = default_tz if default_tz is not None else timezone.utc

    parsed = None
    for date_format in DATE_FORMATS:
        try:
            parsed = datetime.strptime(text, date_format)
            break
        except ValueError:
            continue
    if parsed is None:
        return None

    microsecond = _parse_subsecond(subsecond)
    if microsecond is not None:
        parsed = parsed.replace(microsecond=microsecond)
    return parsed.replace(tzinfo=tz)


@dataclass(frozen=True)
class GeoLocation:
    """A GPS position in signed decimal degrees."""
    latitude: float
    longitude: float

    def __str__(self) -> str:
        return f"{self.latitude:.6f}, {self.longitude:.6f}"


def degrees_to_decimal(
    degrees: Rational,
    minutes: Rational,
    seconds: Rational,
    reference: Optional[str]
) -> Optional[float]:
    """
    Convert a degrees/minutes/seconds coordinate into decimal degrees.

    Args:
        degrees: Whole degrees; the sign is ignored
        minutes: Minutes of arc
        seconds: Seconds of arc
        reference: "S" or "W" (any case) negates the result

    Returns:
        Decimal degrees, or None when a component is not a finite number
        (a zero denominator, for example)
    """
    value = abs(float(degrees)) + float(minutes) / 60.0 + float(seconds) / 3600.0
    if not math.isfinite(value):
        return None
    if reference is not None and reference.strip().upper() in ('S', 'W'):
        return -value
    return value


def parse_gps_coordinate(components: Optional[List[Rational]], reference: Optional[str]) -> Optional[float]:
    """Convert a GPSLatitude/GPSLongitude value and its Ref tag, or None."""
    if components is None or len(components) != 3 or reference is None:
        return None
    degrees, minutes, seconds = components
    return degrees_to_decimal(degrees, minutes, seconds, reference)


def parse_gps_datetime(date_stamp: Optional[str], time_stamp: Optional[List[Rational]]) -> Optional[datetime]:
    """
    Combine GPSDateStamp ("YYYY:MM:DD") and GPSTimeStamp (h, m, s rationals).

    GPS time is always UTC. Seconds keep millisecond precision.

    Returns:
        Aware UTC datetime, or None if either value is missing or invalid
    """
    if not date_stamp or time_stamp is None or len(time_stamp) != 3:
        return None
    hours, minutes, seconds = (float(value) for value in time_stamp)
    if not all(math.isfinite(value) and value >= 0 for value in (hours, minutes, seconds)):
        return None
    text = f"{date_stamp.strip()} {int(hours):02d}:{int(minutes):02d}:{seconds:06.3f}"
    return parse_date(text, default_tz=timezone.utc)
