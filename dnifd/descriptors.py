# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Directory descriptors

Every directory produced by the IFD reader is the same Directory class; what
differs between an IFD0, a GPS IFD or a Nikon makernote is captured by a
DirectoryDescriptor record: its display name, tag name table, which tags
point at child IFDs, which IFD type follows it through the next-IFD link,
and which tag holds a makernote.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Mapping, Optional, Union

from dnifd import makernote_tags, tag_tables


@dataclass(frozen=True, eq=False)
class DirectoryDescriptor:
    """
    Static description of one kind of directory.

    Attributes:
        key: Registry key (e.g. 'ifd0', 'gps', 'nikon2')
        name: Human-readable directory name (e.g. 'Exif IFD0')
        group: Group prefix used by Metadata.as_dict() (e.g. 'IFD0', 'MakerNotes')
        tag_names: Tag id -> tag name
        pointer_tags: Tag id -> descriptor key of the child IFD it points to
        follower: Descriptor key of the IFD linked by the next-IFD offset
        makernote_tag: Tag id holding a makernote block, if any
        utf16le_tags: Tags whose bytes are UTF-16LE text
        encoded_text_tags: Tags whose value starts with an 8-byte character code
    """
    key: str
    name: str
    group: str
    tag_names: Mapping[int, str] = field(default_factory=dict)
    pointer_tags: Mapping[int, str] = field(default_factory=dict)
    follower: Optional[str] = None
    makernote_tag: Optional[int] = None
    utf16le_tags: FrozenSet[int] = frozenset()
    encoded_text_tags: FrozenSet[int] = frozenset()

    def get_tag_name(self, tag_id: int) -> str:
        """Return the tag name, or 'Unknown_0xNNNN' for unnamed tags."""
        name = self.tag_names.get(tag_id)
        if name is None:
            return f"Unknown_0x{tag_id:04X}"
        return name

    def has_tag_name(self, tag_id: int) -> bool:
        return tag_id in self.tag_names

    def __repr__(self) -> str:
        return f"DirectoryDescriptor({self.key!r})"


IFD0 = DirectoryDescriptor(
    key='ifd0',
    name='Exif IFD0',
    group='IFD0',
    tag_names=tag_tables.IFD0_TAG_NAMES,
    pointer_tags={
        tag_tables.TAG_EXIF_IFD_POINTER: 'exif_subifd',
        tag_tables.TAG_GPS_INFO_POINTER: 'gps',
    },
    follower='thumbnail',
    utf16le_tags=tag_tables.XP_TAGS,
)

EXIF_SUBIFD = DirectoryDescriptor(
    key='exif_subifd',
    name='Exif SubIFD',
    group='ExifIFD',
    tag_names=tag_tables.EXIF_SUBIFD_TAG_NAMES,
    pointer_tags={tag_tables.TAG_INTEROP_POINTER: 'interop'},
    makernote_tag=tag_tables.TAG_MAKERNOTE,
    utf16le_tags=tag_tables.XP_TAGS,
    encoded_text_tags=frozenset({tag_tables.TAG_USER_COMMENT}),
)

GPS = DirectoryDescriptor(
    key='gps',
    name='GPS',
    group='GPS',
    tag_names=tag_tables.GPS_TAG_NAMES,
    encoded_text_tags=frozenset({
        tag_tables.TAG_GPS_PROCESSING_METHOD,
        tag_tables.TAG_GPS_AREA_INFORMATION,
    }),
)

INTEROP = DirectoryDescriptor(
    key='interop',
    name='Interoperability',
    group='InteropIFD',
    tag_names=tag_tables.INTEROP_TAG_NAMES,
)

# IFD1 and any further IFDs chained after it (Canon CR2 has three)
THUMBNAIL = DirectoryDescriptor(
    key='thumbnail',
    name='Exif Thumbnail',
    group='IFD1',
    tag_names=tag_tables.THUMBNAIL_TAG_NAMES,
    follower='thumbnail',
    utf16le_tags=tag_tables.XP_TAGS,
)


def _makernote(key: str, name: str, tag_names: Dict[int, str]) -> DirectoryDescriptor:
    return DirectoryDescriptor(key=key, name=name, group='MakerNotes', tag_names=tag_names)


OLYMPUS = _makernote('olympus', 'Olympus Makernote', makernote_tags.OLYMPUS_TAG_NAMES)
NIKON_TYPE1 = _makernote('nikon1', 'Nikon Makernote', makernote_tags.NIKON_TYPE1_TAG_NAMES)
NIKON_TYPE2 = _makernote('nikon2', 'Nikon Makernote', makernote_tags.NIKON_TYPE2_TAG_NAMES)
SONY_TYPE1 = _makernote('sony1', 'Sony Makernote', makernote_tags.SONY_TYPE1_TAG_NAMES)
SONY_TYPE6 = _makernote('sony6', 'Sony Makernote', makernote_tags.SONY_TYPE6_TAG_NAMES)
SIGMA = _makernote('sigma', 'Sigma Makernote', makernote_tags.SIGMA_TAG_NAMES)
KODAK = _makernote('kodak', 'Kodak Makernote', makernote_tags.KODAK_TAG_NAMES)
CANON = _makernote('canon', 'Canon Makernote', makernote_tags.CANON_TAG_NAMES)
CASIO_TYPE1 = _makernote('casio1', 'Casio Makernote', makernote_tags.CASIO_TYPE1_TAG_NAMES)
CASIO_TYPE2 = _makernote('casio2', 'Casio Makernote', makernote_tags.CASIO_TYPE2_TAG_NAMES)
FUJIFILM = _makernote('fujifilm', 'Fujifilm Makernote', makernote_tags.FUJIFILM_TAG_NAMES)
KYOCERA = _makernote('kyocera', 'Kyocera/Contax Makernote', makernote_tags.KYOCERA_TAG_NAMES)
LEICA = _makernote('leica', 'Leica Makernote', makernote_tags.LEICA_TAG_NAMES)
PANASONIC = _makernote('panasonic', 'Panasonic Makernote', makernote_tags.PANASONIC_TAG_NAMES)
PENTAX = _makernote('pentax', 'Pentax Makernote', makernote_tags.PENTAX_TAG_NAMES)
SANYO = _makernote('sanyo', 'Sanyo Makernote', makernote_tags.SANYO_TAG_NAMES)
RICOH = _makernote('ricoh', 'Ricoh Makernote', makernote_tags.RICOH_TAG_NAMES)

DESCRIPTORS: Dict[str, DirectoryDescriptor] = {
    descriptor.key: descriptor
    for descriptor in (
        IFD0, EXIF_SUBIFD, GPS, INTEROP, THUMBNAIL,
        OLYMPUS, NIKON_TYPE1, NIKON_TYPE2, SONY_TYPE1, SONY_TYPE6, SIGMA, KODAK,
        CANON, CASIO_TYPE1, CASIO_TYPE2, FUJIFILM, KYOCERA, LEICA, PANASONIC,
        PENTAX, SANYO, RICOH,
    )
}

DescriptorRef = Union[str, DirectoryDescriptor]


def get_descriptor(ref: DescriptorRef) -> DirectoryDescriptor:
    """
    Resolve a descriptor key or instance to the registered descriptor.

    Raises:
        KeyError: If ref is a key that is not registered
    """
    if isinstance(ref, DirectoryDescriptor):
        return ref
    return DESCRIPTORS[ref]
