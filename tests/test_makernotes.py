"""Tests for makernote identification and decoding."""

import struct

import pytest

from dnifd import descriptors
from dnifd.byte_reader import BIG_ENDIAN, LITTLE_ENDIAN, ByteReader
from dnifd.config import ReaderConfig
from dnifd.exceptions import ErrorKind, OutOfBoundsError
from dnifd.makernotes import BaseOffset, MakernoteRule, find_makernote_rule, resolve_makernote_layout
from tiff_builder import (
    STRING,
    UNDEFINED,
    USHORT,
    decode,
    entry,
    ifd,
    ifd_size,
    offset_entry,
    tiff_header,
    ulong_entry,
    ushort_entry,
)


def rule_name(header, make=None):
    rule = find_makernote_rule(header, make)
    return rule.name if rule is not None else None


class TestRuleMatching:
    """Tests for find_makernote_rule."""

    @pytest.mark.parametrize('header, make, expected', [
        (b'OLYMPUS\x00II\x03\x00', None, 'Olympus (new)'),
        (b'OLYMP\x00\x01\x00', 'OLYMPUS OPTICAL CO.,LTD', 'Olympus'),
        (b'EPSON\x00\x01\x00', None, 'Olympus'),
        (b'\x00\x10\x00\x01', 'Minolta Co., Ltd.', 'Minolta'),
        (b'Nikon\x00\x01\x00', 'NIKON', 'Nikon type 1'),
        (b'Nikon\x00\x02\x10\x00\x00', 'NIKON CORPORATION', 'Nikon type 2'),
        (b'Nikon\x00\x03\x00', 'NIKON', 'Nikon (unknown version)'),
        (b'\x00\x10\x00\x01', 'NIKON', 'Nikon (headerless)'),
        (b'SONY DSC \x00\x00\x00', 'SONY', 'Sony type 1'),
        (b'SEMC MS\x00\x00\x00\x00\x00', 'Sony Ericsson', 'Sony Ericsson'),
        (b'FOVEON\x00\x00\x01\x00', None, 'Sigma'),
        (b'KDK INFO', 'EASTMAN KODAK COMPANY', 'Kodak'),
        (b'\x00\x20\x00\x01', ' Canon ', 'Canon'),
        (b'QVC\x00\x00\x00', 'CASIO COMPUTER CO.,LTD.', 'Casio type 2'),
        (b'\x00\x10\x00\x01', 'CASIO', 'Casio type 1'),
        (b'FUJIFILM\x0c\x00\x00\x00', None, 'Fujifilm'),
        (b'\x00\x10\x00\x01', 'FUJIFILM', 'Fujifilm (make)'),
        (b'KYOCERA            ', None, 'Kyocera'),
        (b'LEICA\x00\x00\x00', 'Leica Camera AG', 'Leica'),
        (b'LEICA\x00\x00\x00', 'LEICA', 'Leica (Panasonic)'),
        (b'Panasonic\x00\x00\x00', 'Panasonic', 'Panasonic'),
        (b'AOC\x00II', 'PENTAX Corporation', 'Pentax AOC'),
        (b'', 'PENTAX Corporation', 'Pentax'),
        (b'\x00\x10', 'Asahi Optical Co.,Ltd', 'Asahi'),
        (b'SANYO\x00\x01\x00', None, 'Sanyo'),
        (b'Rv0103;Rg1C;', 'RICOH', 'Ricoh (text)'),
        (b'RICOH\x00\x00\x00', 'RICOH', 'Ricoh'),
        (b'ricoh\x00\x00\x00', 'Ricoh Company, Ltd.', 'Ricoh'),
        (b'KDK\x00\x00\x00\x00\x00', None, 'Kodak'),
        (b'LEICA\x00\x00\x00', 'Leica Camera AG ', 'Leica'),
    ])
    def test_first_matching_rule(self, header, make, expected):
        assert rule_name(header, make) == expected

    @pytest.mark.parametrize('header, make', [
        (b'\x00\x10\x00\x01', None),
        (b'\x00\x10\x00\x01', 'Canon Inc.'),
        (b'LEICA\x00\x00\x00', 'LEICA CAMERA'),
        (b'LEICA\x00\x00\x00', 'Leica'),
        (b'LEICA\x00\x00\x00', 'leica camera ag'),
        (b'LEICA\x00\x00\x00', 'LEICA CAMERA AG'),
        (b'Nikon\x00\x02\x00', None),
    ])
    def test_no_match(self, header, make):
        assert rule_name(header, make) is None

    def test_unsupported_rules(self):
        assert not find_makernote_rule(b'Nikon\x00\x03\x00', 'NIKON').supported
        assert not find_makernote_rule(b'Rev0103', 'RICOH').supported
        assert find_makernote_rule(b'Ricoh\x00', 'RICOH').supported
        assert find_makernote_rule(b'KDK INFO', None).supported

    def test_leica_make_is_case_sensitive(self):
        """Leica layouts are chosen by the exact make string."""
        rule = find_makernote_rule(b'LEICA\x00\x00\x00', 'Leica Camera AG')
        assert rule.make_case_sensitive
        assert not rule.matches(b'LEICA\x00\x00\x00', 'LEICA CAMERA AG')
        assert not rule.matches(b'LEICA\x00\x00\x00', None)

    def test_canon_make_ignores_case(self):
        assert rule_name(b'\x00\x20\x00\x01', 'CANON') == 'Canon'
        assert rule_name(b'\x00\x20\x00\x01', 'canon') == 'Canon'

    def test_custom_rule_table(self):
        rules = [MakernoteRule('Test', descriptors.CANON, signatures=(b'TEST',), ifd_offset=4)]
        assert find_makernote_rule(b'TEST\x00\x01', None, rules) is rules[0]
        assert find_makernote_rule(b'FUJIFILM', None, rules) is None


class TestLayout:
    """Tests for resolve_makernote_layout."""

    def test_fujifilm_uses_embedded_pointer_and_little_endian(self):
        data = b'\x00' * 4 + b'FUJIFILM' + struct.pack('<I', 12) + ifd([], endian='<')
        layout = resolve_makernote_layout(ByteReader(data, BIG_ENDIAN), 4, 0, None)

        assert layout.descriptor is descriptors.FUJIFILM
        assert layout.reader.endian == LITTLE_ENDIAN
        assert layout.ifd_offset == 16
        assert layout.base_offset == 4
        assert layout.supported

    def test_nikon_type2_uses_embedded_tiff_header(self):
        data = b'Nikon\x00\x02\x00\x00\x00' + b'II*\x00\x08\x00\x00\x00' + ifd([], endian='<')
        layout = resolve_makernote_layout(ByteReader(data, BIG_ENDIAN), 0, 0, 'NIKON')

        assert layout.rule.name == 'Nikon type 2'
        assert layout.reader.endian == LITTLE_ENDIAN
        assert layout.ifd_offset == 18
        assert layout.base_offset == 10

    def test_olympus_new_is_self_contained(self):
        data = b'\x00' * 6 + b'OLYMPUS\x00MM\x03\x00' + ifd([])
        layout = resolve_makernote_layout(ByteReader(data, LITTLE_ENDIAN), 6, 0, None)

        assert layout.reader.endian == BIG_ENDIAN
        assert layout.ifd_offset == 18
        assert layout.base_offset == 6
        assert layout.rule.base is BaseOffset.MAKERNOTE

    def test_olympus_offsets_relative_to_tiff_header(self):
        data = b'\x00' * 100 + b'OLYMP\x00\x01\x00' + ifd([])
        layout = resolve_makernote_layout(ByteReader(data), 100, 6, None)

        assert layout.reader.endian == BIG_ENDIAN
        assert layout.ifd_offset == 108
        assert layout.base_offset == 6

    def test_sony_ericsson_forces_big_endian(self):
        data = b'SEMC MS\x00\x00\x00\x00\x00' + b'MM' + b'\x00' * 6 + ifd([])
        layout = resolve_makernote_layout(ByteReader(data, LITTLE_ENDIAN), 0, 0, None)

        assert layout.reader.endian == BIG_ENDIAN
        assert layout.ifd_offset == 20

    def test_kodak_byte_order_follows_signature(self):
        """"KDK INFO" blocks are big-endian, other "KDK" blocks little-endian."""
        data = b'KDK INFO' + b'\x00' * 8
        layout = resolve_makernote_layout(ByteReader(data, LITTLE_ENDIAN), 0, 0, None)
        assert layout.reader.endian == BIG_ENDIAN
        assert layout.ifd_offset == 8
        assert layout.rule.fields

        data = b'KDK\x00\x00\x00\x00\x00' + b'\x00' * 8
        layout = resolve_makernote_layout(ByteReader(data, BIG_ENDIAN), 0, 0, None)
        assert layout.reader.endian == LITTLE_ENDIAN

    def test_kyocera_offsets_relative_to_makernote(self):
        data = b'\x00' * 10 + b'KYOCERA' + b' ' * 15 + ifd([])
        layout = resolve_makernote_layout(ByteReader(data), 10, 0, None)

        assert layout.ifd_offset == 32
        assert layout.base_offset == 10
        assert layout.rule.base is BaseOffset.MAKERNOTE

    def test_no_match(self):
        assert resolve_makernote_layout(ByteReader(b'\x00\x01\x02\x03'), 0, 0, None) is None

    def test_header_at_end_of_data(self):
        assert resolve_makernote_layout(ByteReader(b'\x00\x01'), 2, 0, None) is None

    def test_missing_ifd_pointer(self):
        with pytest.raises(OutOfBoundsError):
            resolve_makernote_layout(ByteReader(b'FUJIFILM'), 0, 0, None)


def makernote_stream(makernote, make=None):
    """
    Big-endian stream: IFD0 -> Exif SubIFD -> MakerNote.

    IFD0 holds a Make tag only when make is given; it is stored out of line,
    so make must be at least four characters long.
    """
    if make is None:
        sub_offset = 8 + ifd_size(1)
        ifd0 = ifd([ulong_entry(0x8769, sub_offset)])
    else:
        make_bytes = make.encode('ascii') + b'\x00'
        make_offset = 8 + ifd_size(2)
        sub_offset = make_offset + len(make_bytes)
        ifd0 = ifd([
            offset_entry(0x010F, STRING, len(make_bytes), make_offset),
            ulong_entry(0x8769, sub_offset),
        ]) + make_bytes
    makernote_offset = sub_offset + ifd_size(1)
    return (tiff_header()
            + ifd0
            + ifd([offset_entry(0x927C, UNDEFINED, len(makernote), makernote_offset)])
            + makernote)


def fujifilm_makernote():
    # Little-endian IFD at +12, value offsets relative to the makernote
    serial_offset = 12 + ifd_size(2)
    return (b'FUJIFILM' + struct.pack('<I', 12)
            + ifd([
                ushort_entry(0x1000, 3, '<'),
                offset_entry(0x0010, STRING, 8, serial_offset, '<'),
            ], endian='<')
            + b'SN123456')


class TestMakernoteDecoding:
    """Tests for makernote directories produced by IfdReader."""

    def test_fujifilm(self):
        makernote = fujifilm_makernote()
        assert len(makernote) == 50

        metadata, ifd0 = decode(makernote_stream(makernote))
        assert [d.key for d in metadata] == ['ifd0', 'exif_subifd', 'fujifilm']
        assert not metadata.has_errors

        sub, fujifilm = metadata.directories[1:]
        assert fujifilm.parent is sub
        assert fujifilm.name == 'Fujifilm Makernote'
        assert fujifilm.get_int(0x1000) == 3
        assert fujifilm.get_string(0x0010) == 'SN123456'
        assert fujifilm.get_tag_name(0x1000) == 'Quality'
        assert sub.get_byte_array(0x927C) == makernote

    def test_nikon_type2_in_little_endian_stream(self):
        # IFD0: Make (out of line), ExifOffset
        make_offset = 8 + ifd_size(2)
        sub_offset = make_offset + 6
        makernote_offset = sub_offset + ifd_size(1)
        makernote = (b'Nikon\x00\x02\x00\x00\x00'
                     + b'MM' + struct.pack('>HI', 0x2A, 8)
                     + ifd([
                         entry(0x0002, USHORT, 2, struct.pack('>HH', 0, 200)),
                         offset_entry(0x0004, STRING, 5, 8 + ifd_size(2)),
                     ])
                     + b'FINE\x00')
        assert len(makernote) == 53

        data = (tiff_header('<')
                + ifd([
                    offset_entry(0x010F, STRING, 6, make_offset, '<'),
                    ulong_entry(0x8769, sub_offset, '<'),
                ], endian='<')
                + b'NIKON\x00'
                + ifd([offset_entry(0x927C, UNDEFINED, len(makernote), makernote_offset, '<')], endian='<')
                + makernote)

        metadata, _ = decode(data, endian='<')
        assert [d.key for d in metadata] == ['ifd0', 'exif_subifd', 'nikon2']
        assert not metadata.has_errors

        nikon = metadata.get_first_directory_of_type(descriptors.NIKON_TYPE2)
        assert nikon.get_int_array(0x0002) == [0, 200]
        assert nikon.get_string(0x0004) == 'FINE'
        assert nikon.get_tag_name(0x0004) == 'Quality'
        assert nikon.resolve_string(0x010F) == 'NIKON'

    def test_unsupported_makernote(self):
        metadata, _ = decode(makernote_stream(b'Rv0103;Rg1C;Bg18;\x00', make='RICOH'))
        sub = metadata.get_first_directory_of_type('exif_subifd')
        assert len(metadata) == 2
        assert [e.kind for e in sub.errors] == [ErrorKind.UNSUPPORTED_MAKERNOTE]
        assert sub.errors[0].tag_id == 0x927C
        assert sub.contains_tag(0x927C)

    def test_kodak_fixed_fields(self):
        """Kodak values are read from fixed positions after the header."""
        fields = bytearray(108)
        fields[0:8] = b'DC4800\x00\x00'
        fields[9] = 2
        struct.pack_into('>H', fields, 12, 2160)
        struct.pack_into('>H', fields, 14, 1440)
        struct.pack_into('>H', fields, 16, 2001)
        fields[18:20] = b'\x03\x0f'
        struct.pack_into('>I', fields, 32, 125)
        struct.pack_into('>h', fields, 36, -3)
        struct.pack_into('>H', fields, 96, 200)
        fields[107] = 0xFF

        metadata, _ = decode(makernote_stream(b'KDK INFO' + bytes(fields)))
        assert [d.key for d in metadata] == ['ifd0', 'exif_subifd', 'kodak']
        assert not metadata.has_errors

        kodak = metadata.get_first_directory_of_type(descriptors.KODAK)
        assert len(kodak) == 26
        assert kodak.parent is metadata.directories[1]
        assert kodak.get_string(0) == 'DC4800'
        assert kodak.get_int(9) == 2
        assert kodak.get_int(12) == 2160
        assert kodak.get_int(14) == 1440
        assert kodak.get_int(16) == 2001
        assert kodak.get_byte_array(18) == b'\x03\x0f'
        assert kodak.get_int(32) == 125
        assert kodak.get_int(36) == -3
        assert kodak.get_int(96) == 200
        assert kodak.get_int(107) == -1
        assert kodak.get_tag_name(96) == 'ISO'
        assert kodak.get_tag_name(0) == 'KodakModel'

    def test_kodak_little_endian(self):
        fields = bytearray(108)
        struct.pack_into('<H', fields, 12, 640)
        metadata, _ = decode(makernote_stream(b'KDK\x00\x00\x00\x00\x00' + bytes(fields)))
        kodak = metadata.get_first_directory_of_type(descriptors.KODAK)
        assert kodak.get_int(12) == 640

    def test_kodak_truncated(self):
        """Fields are read until the first one that does not fit."""
        metadata, _ = decode(makernote_stream(b'KDK INFO' + bytes(40)))
        sub = metadata.get_first_directory_of_type('exif_subifd')
        kodak = metadata.get_first_directory_of_type(descriptors.KODAK)

        assert not sub.has_errors
        assert len(kodak) == 15
        assert kodak.contains_tag(36)
        assert not kodak.contains_tag(56)
        assert [e.kind for e in kodak.errors] == [ErrorKind.TRUNCATED_VALUE]
        assert kodak.errors[0].tag_id == 56

    def test_kyocera_offsets_relative_to_makernote(self):
        """Out-of-line Kyocera values are found relative to the makernote."""
        value_offset = 22 + ifd_size(1)
        makernote = (b'KYOCERA' + b' ' * 15
                     + ifd([offset_entry(0x0001, UNDEFINED, 6, value_offset)])
                     + b'THUMB!')

        metadata, _ = decode(makernote_stream(makernote, make='KYOCERA'))
        assert [d.key for d in metadata] == ['ifd0', 'exif_subifd', 'kyocera']
        assert not metadata.has_errors

        kyocera = metadata.get_first_directory_of_type(descriptors.KYOCERA)
        assert kyocera.get_byte_array(0x0001) == b'THUMB!'

    def test_ricoh_signature_ignores_case(self):
        makernote = (b'RICOH\x00\x00\x00'
                     + ifd([
                         entry(0x0001, STRING, 4, b'Rdc\x00'),
                         offset_entry(0x0002, STRING, 8, 8 + ifd_size(2)),
                     ])
                     + b'V1.02\x00\x00\x00')

        metadata, _ = decode(makernote_stream(makernote, make='RICOH'))
        assert [d.key for d in metadata] == ['ifd0', 'exif_subifd', 'ricoh']
        assert not metadata.has_errors

        ricoh = metadata.get_first_directory_of_type(descriptors.RICOH)
        assert ricoh.get_string(0x0001) == 'Rdc'
        assert ricoh.get_string(0x0002) == 'V1.02'

    def test_unrecognised_makernote(self):
        metadata, _ = decode(makernote_stream(b'\x00\x01\x02\x03\x04\x05\x06\x07'))
        assert len(metadata) == 2
        assert not metadata.has_errors

    def test_makernote_header_beyond_data(self):
        metadata, _ = decode(makernote_stream(b'FUJIFILM\x00'))
        sub = metadata.get_first_directory_of_type('exif_subifd')
        assert len(metadata) == 2
        assert [e.kind for e in sub.errors] == [ErrorKind.OUT_OF_BOUNDS]

    def test_makernote_ifd_outside_data(self):
        metadata, _ = decode(makernote_stream(b'FUJIFILM' + struct.pack('<I', 400)))
        sub = metadata.get_first_directory_of_type('exif_subifd')
        assert len(metadata) == 2
        assert [e.kind for e in sub.errors] == [ErrorKind.UNRESOLVED_POINTER]

    def test_makernotes_can_be_disabled(self):
        metadata, _ = decode(makernote_stream(fujifilm_makernote()), config=ReaderConfig(follow_makernotes=False))
        assert [d.key for d in metadata] == ['ifd0', 'exif_subifd']
