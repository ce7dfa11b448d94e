# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for DNIFD

Dumps the directory graph of a TIFF-structured file (TIFF, DNG, ORF, RW2 or
a raw "Exif\\0\\0" blob).

Copyright 2025 DNAi inc.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from dnifd import __version__
from dnifd.config import ReaderConfig
from dnifd.descriptors import EXIF_SUBIFD, GPS, IFD0
from dnifd.exceptions import MetadataReadError
from dnifd.exif_reader import read_file
from dnifd.metadata import Metadata
from dnifd.rational import Rational
from dnifd.tag_tables import DATE_COMPANION_TAGS
from dnifd.value_coercion import parse_time_zone_offset


def _json_value(value: Any) -> Any:
    """Convert a decoded tag value into something json.dumps accepts."""
    if isinstance(value, Rational):
        return value.to_simple_string(True)
    if isinstance(value, (bytes, bytearray)):
        return f"(Binary data {len(value)} bytes)"
    if isinstance(value, list):
        return [_json_value(item) for item in value]
    return value


def _format_value(value: Any) -> str:
    value = _json_value(value)
    if isinstance(value, list):
        return ' '.join(str(item) for item in value)
    return str(value)


def resolved_dates(metadata: Metadata, default_tz=None) -> Dict[str, str]:
    """
    Combine the date tags with their sub-second and offset companions.

    Returns:
        "Composite:<TagName>" -> ISO 8601 string, for every date that parses
    """
    source = metadata.get_first_directory_of_type(EXIF_SUBIFD) or metadata.get_first_directory_of_type(IFD0)
    if source is None:
        return {}

    dates = {}
    for tag_id in DATE_COMPANION_TAGS:
        value = source.get_datetime(tag_id, default_tz)
        if value is not None:
            dates[f"Composite:{source.get_tag_name(tag_id)}"] = value.isoformat()
    return dates


def gps_composites(metadata: Metadata) -> Dict[str, Any]:
    """Return "Composite:GPS*" values derived from the first GPS directory."""
    gps = metadata.get_first_directory_of_type(GPS)
    if gps is None:
        return {}

    values: Dict[str, Any] = {}
    location = gps.get_geo_location()
    if location is not None:
        values['Composite:GPSLatitude'] = location.latitude
        values['Composite:GPSLongitude'] = location.longitude
    timestamp = gps.get_gps_datetime()
    if timestamp is not None:
        values['Composite:GPSDateTime'] = timestamp.isoformat()
    return values


def format_text(metadata: Metadata, default_tz=None) -> str:
    """Render every directory, its tags and its errors as plain text."""
    dates = resolved_dates(metadata, default_tz)
    dates.update(gps_composites(metadata))
    lines: List[str] = []
    for directory in metadata:
        lines.append(f"[{directory.name}]")
        for tag in directory:
            name = directory.get_tag_name(tag.tag_id)
            if tag.has_value:
                value = _format_value(directory.get_object(tag.tag_id))
            else:
                value = "(unreadable)"
            lines.append(f"  0x{tag.tag_id:04X} {name} = {value}")
        if directory.thumbnail_data is not None:
            lines.append(f"  Thumbnail data: {len(directory.thumbnail_data)} bytes")
        for error in directory.errors:
            lines.append(f"  ! {error.kind.name}: {error}")

    if dates:
        lines.append("[Composite]")
        for key, value in dates.items():
            lines.append(f"  {key.split(':', 1)[1]} = {value}")
    return "\n".join(lines)


def format_json(metadata: Metadata, default_tz=None) -> str:
    result = {key: _json_value(value) for key, value in metadata.as_dict().items()}
    result.update(resolved_dates(metadata, default_tz))
    result.update(gps_composites(metadata))
    errors = [
        {'directory': directory.name, 'kind': error.kind.name, 'message': str(error)}
        for directory, error in metadata.errors
    ]
    if errors:
        result['Errors'] = errors
    return json.dumps(result, indent=2, ensure_ascii=False)


def _time_zone(value: str):
    tz = parse_time_zone_offset(value)
    if tz is None:
        raise argparse.ArgumentTypeError(f"invalid UTC offset {value!r}, expected +HH:MM")
    return tz


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='dnifd',
        description='Dump the TIFF/EXIF directories of a file',
    )
    parser.add_argument('file', help='TIFF-structured file to read')
    parser.add_argument('--json', action='store_true', help='Output metadata in JSON format')
    parser.add_argument('--no-thumbnail', action='store_true', help='Do not extract IFD1 thumbnail bytes')
    parser.add_argument('--timezone', type=_time_zone, default=None,
                        help='UTC offset (+HH:MM) assumed for dates without OffsetTime tags')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Log decode warnings (-vv for debug output)')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Returns:
        0 on success, 1 when the file cannot be read or has no TIFF header
    """
    args = build_parser().parse_args(argv)

    level = logging.ERROR
    if args.verbose == 1:
        level = logging.WARNING
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')

    config = ReaderConfig(store_thumbnail_bytes=not args.no_thumbnail)
    try:
        metadata = read_file(args.file, config)
    except MetadataReadError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if args.json:
        print(format_json(metadata, args.timezone))
    else:
        print(format_text(metadata, args.timezone))
    return 0
