# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Metadata aggregate

Copyright 2025 DNAi inc.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

from dnifd.descriptors import DescriptorRef, get_descriptor
from dnifd.directory import Directory
from dnifd.exceptions import DirectoryError


class Metadata:
    """
    Ordered collection of the directories decoded from one stream.

    Directories appear in discovery order: a parent precedes the children
    its pointer tags led to, and IFD0's subtree precedes IFD1.
    """

    def __init__(self):
        self._directories: List[Directory] = []

    def add_directory(self, directory: Directory) -> Directory:
        self._directories.append(directory)
        return directory

    @property
    def directories(self) -> List[Directory]:
        return list(self._directories)

    def get_directories_of_type(self, descriptor: DescriptorRef) -> List[Directory]:
        """Return every directory built from the given descriptor or key."""
        wanted = get_descriptor(descriptor)
        return [d for d in self._directories if d.descriptor is wanted]

    def get_first_directory_of_type(self, descriptor: DescriptorRef) -> Optional[Directory]:
        wanted = get_descriptor(descriptor)
        for directory in self._directories:
            if directory.descriptor is wanted:
                return directory
        return None

    def contains_directory_of_type(self, descriptor: DescriptorRef) -> bool:
        return self.get_first_directory_of_type(descriptor) is not None

    def __iter__(self) -> Iterator[Directory]:
        return iter(list(self._directories))

    def __len__(self) -> int:
        return len(self._directories)

    @property
    def has_errors(self) -> bool:
        return any(directory.has_errors for directory in self._directories)

    @property
    def errors(self) -> List[Tuple[Directory, DirectoryError]]:
        """All recorded errors, paired with the directory that holds them."""
        return [(directory, error) for directory in self._directories for error in directory.errors]

    def as_dict(self) -> Dict[str, Any]:
        """
        Flatten all directories into a "Group:TagName" -> value mapping.

        When the same key occurs in more than one directory (e.g. a second
        thumbnail IFD) the first occurrence wins.

        Returns:
            Dictionary of decoded tag values
        """
        result: Dict[str, Any] = {}
        for directory in self._directories:
            for tag in directory:
                key = f"{directory.descriptor.group}:{directory.get_tag_name(tag.tag_id)}"
                if key not in result:
                    result[key] = directory.get_object(tag.tag_id)
        return result

    def __repr__(self) -> str:
        return f"<Metadata: {len(self._directories)} directories>"
