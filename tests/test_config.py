"""Tests for ReaderConfig."""

import pytest

from dnifd.config import ReaderConfig


class TestReaderConfig:
    """Tests for reader options."""

    def test_defaults(self):
        config = ReaderConfig()
        assert config.store_thumbnail_bytes is True
        assert config.max_ifd_depth == 16
        assert config.max_invalid_format_codes == 5
        assert config.follow_makernotes is True

    @pytest.mark.parametrize('field', ['max_ifd_depth', 'max_invalid_format_codes'])
    def test_limits_must_be_positive(self, field):
        with pytest.raises(ValueError):
            ReaderConfig(**{field: 0})

    def test_from_dict_ignores_unknown_keys(self):
        config = ReaderConfig.from_dict({'max_ifd_depth': 4, 'color': 'blue'})
        assert config.max_ifd_depth == 4
        assert config.store_thumbnail_bytes is True
