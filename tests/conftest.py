"""Shared fixtures for DNIFD tests."""

import struct

import pytest

from tiff_builder import (
    STRING,
    URATIONAL,
    entry,
    ifd,
    ifd_size,
    offset_entry,
    tiff_header,
    ulong_entry,
)


@pytest.fixture
def model_tiff():
    """Big-endian stream with one IFD0 entry: Model "ABC" stored out of line."""
    model_offset = 8 + ifd_size(1)
    return (tiff_header('>')
            + ifd([offset_entry(0x0110, STRING, 6, model_offset)])
            + b'ABC\x00\x00\x00')


@pytest.fixture
def exif_chain():
    """
    Big-endian stream with IFD0 -> Exif SubIFD -> Interop, and IFD0 -> GPS.

    IFD0: Make "ACME", ExifOffset, GPSInfo
    SubIFD: ExposureTime 1/250, InteropOffset
    Interop: InteropIndex "R98"
    GPS: GPSLatitudeRef "N"
    """
    ifd0_offset = 8
    sub_offset = ifd0_offset + ifd_size(3)
    interop_offset = sub_offset + ifd_size(2)
    gps_offset = interop_offset + ifd_size(1)
    rational_offset = gps_offset + ifd_size(1)

    return (tiff_header('>', ifd0_offset)
            + ifd([
                entry(0x010F, STRING, 4, b'ACME'),
                ulong_entry(0x8769, sub_offset),
                ulong_entry(0x8825, gps_offset),
            ])
            + ifd([
                offset_entry(0x829A, URATIONAL, 1, rational_offset),
                ulong_entry(0xA005, interop_offset),
            ])
            + ifd([entry(0x0001, STRING, 4, b'R98\x00')])
            + ifd([entry(0x0001, STRING, 2, b'N\x00')])
            + struct.pack('>II', 1, 250))
