"""Tests for the TIFF header front end."""

import pytest

from dnifd.config import ReaderConfig
from dnifd.exceptions import MetadataReadError
from dnifd.exif_reader import ExifReader, read_file, read_metadata
from dnifd.metadata import Metadata
from tiff_builder import STRING, entry, ifd, tiff_header, ulong_entry, ushort_entry


class TestHeader:
    """Tests for TIFF header detection."""

    def test_big_endian(self, model_tiff):
        metadata = read_metadata(model_tiff)
        assert metadata.get_first_directory_of_type('ifd0').get_string(0x0110) == 'ABC'

    def test_little_endian(self):
        data = tiff_header('<') + ifd([ushort_entry(0x0100, 640, '<')], endian='<')
        metadata = read_metadata(data)
        assert metadata.get_first_directory_of_type('ifd0').get_int(0x0100) == 640

    def test_exif_preamble(self, model_tiff):
        metadata = read_metadata(b'Exif\x00\x00' + model_tiff)
        ifd0 = metadata.get_first_directory_of_type('ifd0')
        assert ifd0.get_string(0x0110) == 'ABC'
        assert not metadata.has_errors

    def test_explicit_header_offset(self, model_tiff):
        metadata = ExifReader().extract(b'\x00' * 10 + model_tiff, tiff_header_offset=10)
        assert metadata.get_first_directory_of_type('ifd0').get_string(0x0110) == 'ABC'

    @pytest.mark.parametrize('marker', [0x2A, 0x4F52, 0x5352, 0x55])
    def test_accepted_markers(self, marker):
        data = tiff_header(marker=marker) + ifd([ushort_entry(0x0100, 1)])
        assert len(read_metadata(data)) == 1

    def test_unknown_marker(self):
        data = tiff_header(marker=0x2B) + ifd([])
        with pytest.raises(MetadataReadError) as excinfo:
            read_metadata(data)
        assert excinfo.value.message == 'Unexpected TIFF marker: 0x2B'

    def test_unknown_byte_order(self):
        data = b'XX' + tiff_header()[2:] + ifd([])
        with pytest.raises(MetadataReadError) as excinfo:
            read_metadata(data)
        assert 'Motorola/Intel' in excinfo.value.message

    @pytest.mark.parametrize('data', [b'', b'MM\x00*', b'Exif\x00\x00MM'])
    def test_too_short(self, data):
        with pytest.raises(MetadataReadError):
            read_metadata(data)

    def test_first_ifd_offset_beyond_data(self):
        data = tiff_header(first_ifd_offset=5000) + ifd([ushort_entry(0x0100, 1)])
        metadata = read_metadata(data)
        assert metadata.get_first_directory_of_type('ifd0').get_int(0x0100) == 1


class TestExifReader:
    """Tests for ExifReader entry points."""

    def test_read_ifds_without_header(self):
        data = b'\x00' * 8 + ifd([entry(0x010F, STRING, 4, b'ACME')])
        metadata = ExifReader().read_ifds(data, 8, '>')
        assert metadata.get_first_directory_of_type('ifd0').get_string(0x010F) == 'ACME'

    def test_existing_metadata_is_extended(self, model_tiff):
        metadata = Metadata()
        result = ExifReader().extract(model_tiff, metadata)
        assert result is metadata
        assert len(metadata) == 1

    def test_config_is_applied(self, exif_chain):
        metadata = ExifReader(ReaderConfig(max_ifd_depth=1)).extract(exif_chain)
        assert not metadata.contains_directory_of_type('interop')

    def test_subifd_pointer(self):
        data = tiff_header() + ifd([ulong_entry(0x8769, 26)]) + ifd([entry(0x9000, STRING, 4, b'0232')])
        metadata = read_metadata(data)
        sub = metadata.get_first_directory_of_type('exif_subifd')
        assert sub.get_string(0x9000) == '0232'


class TestReadFile:
    """Tests for read_file."""

    def test_reads_file(self, tmp_path, model_tiff):
        path = tmp_path / 'image.tif'
        path.write_bytes(model_tiff)
        metadata = read_file(path)
        assert metadata.get_first_directory_of_type('ifd0').get_string(0x0110) == 'ABC'
        assert len(read_file(str(path))) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(MetadataReadError) as excinfo:
            read_file(tmp_path / 'missing.tif')
        assert 'Cannot read' in excinfo.value.message
