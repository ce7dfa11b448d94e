# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Reader configuration

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping


@dataclass
class ReaderConfig:
    """
    Options controlling an IFD decode pass.

    Attributes:
        store_thumbnail_bytes: Copy the IFD1 JPEG thumbnail into
            Directory.thumbnail_data after decoding
        max_ifd_depth: Deepest pointer nesting followed (IFD0 is depth 0)
        max_invalid_format_codes: Invalid format codes tolerated in one IFD
            before the rest of its table is abandoned
        follow_makernotes: Decode vendor makernote IFDs
    """
    store_thumbnail_bytes: bool = True
    max_ifd_depth: int = 16
    max_invalid_format_codes: int = 5
    follow_makernotes: bool = True

    def __post_init__(self):
        if self.max_ifd_depth <= 0:
            raise ValueError(f"max_ifd_depth must be positive, got {self.max_ifd_depth}")
        if self.max_invalid_format_codes <= 0:
            raise ValueError(
                f"max_invalid_format_codes must be positive, got {self.max_invalid_format_codes}"
            )

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> 'ReaderConfig':
        """
        Build a configuration from a mapping, ignoring unknown keys.

        Raises:
            ValueError: If a limit is zero or negative
        """
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in values.items() if key in known})
