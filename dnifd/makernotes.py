# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Makernote dispatch table

Camera vendors store makernotes as IFDs with their own conventions: a
signature header of varying length, value offsets measured from the TIFF
header or from the makernote itself, and sometimes a byte order that differs
from the enclosing stream. Each convention is one MakernoteRule; the first
rule matching the makernote header bytes and the camera make wins. Kodak
stores its values at fixed positions instead, described by a FixedField
table on its rule.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from dnifd import descriptors
from dnifd.byte_reader import BIG_ENDIAN, LITTLE_ENDIAN, ByteReader
from dnifd.data_format import DataFormat
from dnifd.descriptors import DirectoryDescriptor

# Bytes read from the start of a makernote for signature matching
SIGNATURE_LENGTH = 12

BYTE_ORDER_MARKERS = {
    b'II': LITTLE_ENDIAN,
    b'MM': BIG_ENDIAN,
}


class BaseOffset(Enum):
    """Position that makernote value offsets are measured from."""
    TIFF_HEADER = "tiff_header"
    MAKERNOTE = "makernote"


@dataclass(frozen=True)
class FixedField:
    """A makernote value stored at a fixed position rather than in an IFD entry."""
    position: int
    data_format: DataFormat
    count: int = 1

    @property
    def size(self) -> int:
        return self.count * self.data_format.size


@dataclass(frozen=True)
class MakernoteRule:
    """
    One makernote layout.

    Attributes:
        name: Short label used in log and error messages
        descriptor: Descriptor of the directory to build
        signatures: Accepted header prefixes; empty accepts any header
        ignore_case: Compare signatures case-insensitively
        make_prefix: Camera make must start with this (case-insensitive)
        make_equals: Camera make must equal this
        make_case_sensitive: Compare make_equals exactly instead of ignoring case
        version_at: Header byte holding a version number
        version: Required value of the version byte
        ifd_offset: Start of the IFD (or of the fixed fields) relative to the makernote
        base: Where value offsets are measured from
        base_adjust: Added to the base position
        byte_order: Forced byte order for the makernote IFD
        big_endian_signature: Header prefix that switches the makernote to big-endian
        byte_order_at: Header position of an embedded "II"/"MM" marker
        ifd_pointer_at: Header position of a 4-byte makernote-relative IFD pointer
        fields: Values at fixed positions, read instead of an IFD when set
        supported: False for recognised layouts that cannot be decoded
    """
    name: str
    descriptor: Optional[DirectoryDescriptor]
    signatures: Tuple[bytes, ...] = ()
    ignore_case: bool = False
    make_prefix: Optional[str] = None
    make_equals: Optional[str] = None
    make_case_sensitive: bool = False
    version_at: Optional[int] = None
    version: Optional[int] = None
    ifd_offset: int = 0
    base: BaseOffset = BaseOffset.TIFF_HEADER
    base_adjust: int = 0
    byte_order: Optional[str] = None
    big_endian_signature: Optional[bytes] = None
    byte_order_at: Optional[int] = None
    ifd_pointer_at: Optional[int] = None
    fields: Tuple[FixedField, ...] = ()
    supported: bool = True

    def matches(self, header: bytes, make: Optional[str]) -> bool:
        """
        Check the rule against the makernote header and camera make.

        Args:
            header: First bytes of the makernote (may be shorter than SIGNATURE_LENGTH)
            make: Camera make from IFD0, if known

        Returns:
            True if every condition of the rule holds
        """
        if self.signatures:
            if self.ignore_case:
                found = any(header[:len(s)].lower() == s.lower() for s in self.signatures)
            else:
                found = any(header[:len(s)] == s for s in self.signatures)
            if not found:
                return False

        if self.version_at is not None:
            if len(header) <= self.version_at or header[self.version_at] != self.version:
                return False

        normalized = make.strip().upper() if make else None
        if self.make_prefix is not None:
            if not normalized or not normalized.startswith(self.make_prefix.upper()):
                return False
        if self.make_equals is not None:
            if self.make_case_sensitive:
                equal = make is not None and make.strip() == self.make_equals
            else:
                equal = normalized is not None and normalized == self.make_equals.upper()
            if not equal:
                return False
        return True

    def layout(self, reader: ByteReader, makernote_offset: int, tiff_header_offset: int) -> 'MakernoteLayout':
        """
        Compute where the makernote IFD starts and how to read it.

        Raises:
            OutOfBoundsError: If an embedded byte order marker or IFD pointer
                lies outside the buffer
        """
        endian = self.byte_order or reader.endian
        if self.big_endian_signature is not None:
            signature_length = len(self.big_endian_signature)
            if (reader.is_valid_range(makernote_offset, signature_length)
                    and reader.read_bytes(makernote_offset, signature_length) == self.big_endian_signature):
                endian = BIG_ENDIAN
        if self.byte_order_at is not None:
            marker = reader.read_bytes(makernote_offset + self.byte_order_at, 2)
            endian = BYTE_ORDER_MARKERS.get(marker, endian)
        makernote_reader = reader.with_byte_order(endian)

        if self.base is BaseOffset.MAKERNOTE:
            base_offset = makernote_offset + self.base_adjust
        else:
            base_offset = tiff_header_offset + self.base_adjust

        if self.ifd_pointer_at is not None:
            ifd_offset = makernote_offset + makernote_reader.read_u32(makernote_offset + self.ifd_pointer_at)
        else:
            ifd_offset = makernote_offset + self.ifd_offset

        return MakernoteLayout(
            rule=self,
            descriptor=self.descriptor,
            reader=makernote_reader,
            ifd_offset=ifd_offset,
            base_offset=base_offset,
        )


@dataclass
class MakernoteLayout:
    """Resolved position, base and byte order of one makernote IFD."""
    rule: MakernoteRule
    descriptor: Optional[DirectoryDescriptor]
    reader: ByteReader
    ifd_offset: int
    base_offset: int

    @property
    def supported(self) -> bool:
        return self.rule.supported


# Positions are relative to the end of the 8-byte "KDK" header
KODAK_FIELDS = (
    FixedField(0, DataFormat.STRING, 8),
    FixedField(9, DataFormat.BYTE),
    FixedField(10, DataFormat.BYTE),
    FixedField(12, DataFormat.USHORT),
    FixedField(14, DataFormat.USHORT),
    FixedField(16, DataFormat.USHORT),
    FixedField(18, DataFormat.UNDEFINED, 2),
    FixedField(20, DataFormat.UNDEFINED, 4),
    FixedField(24, DataFormat.USHORT),
    FixedField(27, DataFormat.BYTE),
    FixedField(28, DataFormat.BYTE),
    FixedField(29, DataFormat.BYTE),
    FixedField(30, DataFormat.USHORT),
    FixedField(32, DataFormat.ULONG),
    FixedField(36, DataFormat.SSHORT),
    FixedField(56, DataFormat.BYTE),
    FixedField(64, DataFormat.BYTE),
    FixedField(92, DataFormat.BYTE),
    FixedField(93, DataFormat.BYTE),
    FixedField(94, DataFormat.USHORT),
    FixedField(96, DataFormat.USHORT),
    FixedField(98, DataFormat.USHORT),
    FixedField(100, DataFormat.USHORT),
    FixedField(102, DataFormat.USHORT),
    FixedField(104, DataFormat.USHORT),
    FixedField(107, DataFormat.SBYTE),
)


MAKERNOTE_RULES: List[MakernoteRule] = [
    # "OLYMPUS\0" + byte order + version: self-contained TIFF-like block
    MakernoteRule('Olympus (new)', descriptors.OLYMPUS, signatures=(b'OLYMPUS\x00',),
                  ifd_offset=12, base=BaseOffset.MAKERNOTE, byte_order_at=8),
    # Epson and Agfa use the Olympus layout
    MakernoteRule('Olympus', descriptors.OLYMPUS, signatures=(b'OLYMP', b'EPSON', b'AGFA'),
                  ifd_offset=8),
    # Minolta bodies carry an Olympus IFD starting at the first byte
    MakernoteRule('Minolta', descriptors.OLYMPUS, make_prefix='MINOLTA'),
    MakernoteRule('Nikon type 1', descriptors.NIKON_TYPE1, signatures=(b'Nikon',), make_prefix='NIKON',
                  version_at=6, version=1, ifd_offset=8),
    # "Nikon\0\2\0\0\0" followed by a complete TIFF header at +10
    MakernoteRule('Nikon type 2', descriptors.NIKON_TYPE2, signatures=(b'Nikon',), make_prefix='NIKON',
                  version_at=6, version=2, ifd_offset=18, base=BaseOffset.MAKERNOTE, base_adjust=10,
                  byte_order_at=10),
    MakernoteRule('Nikon (unknown version)', descriptors.NIKON_TYPE2, signatures=(b'Nikon',),
                  make_prefix='NIKON', supported=False),
    # Coolpix 775, E990 and D1: no header
    MakernoteRule('Nikon (headerless)', descriptors.NIKON_TYPE2, make_prefix='NIKON'),
    MakernoteRule('Sony type 1', descriptors.SONY_TYPE1, signatures=(b'SONY CAM', b'SONY DSC'),
                  ifd_offset=12),
    # 12 byte header, "MM" and 6 unknown bytes
    MakernoteRule('Sony Ericsson', descriptors.SONY_TYPE6, signatures=(b'SEMC MS\x00\x00\x00\x00\x00',),
                  ifd_offset=20, byte_order=BIG_ENDIAN),
    MakernoteRule('Sigma', descriptors.SIGMA, signatures=(b'SIGMA\x00\x00\x00', b'FOVEON\x00\x00'),
                  ifd_offset=10),
    # Values at fixed positions rather than an IFD
    MakernoteRule('Kodak', descriptors.KODAK, signatures=(b'KDK',), ifd_offset=8, byte_order=LITTLE_ENDIAN,
                  big_endian_signature=b'KDK INFO', fields=KODAK_FIELDS),
    MakernoteRule('Canon', descriptors.CANON, make_equals='Canon'),
    MakernoteRule('Casio type 2', descriptors.CASIO_TYPE2, signatures=(b'QVC\x00\x00\x00',),
                  make_prefix='CASIO', ifd_offset=6),
    MakernoteRule('Casio type 1', descriptors.CASIO_TYPE1, make_prefix='CASIO'),
    # Also used by some Leica bodies (Digilux 4.3)
    MakernoteRule('Fujifilm', descriptors.FUJIFILM, signatures=(b'FUJIFILM',),
                  base=BaseOffset.MAKERNOTE, byte_order=LITTLE_ENDIAN, ifd_pointer_at=8),
    MakernoteRule('Fujifilm (make)', descriptors.FUJIFILM, make_equals='Fujifilm',
                  base=BaseOffset.MAKERNOTE, byte_order=LITTLE_ENDIAN, ifd_pointer_at=8),
    MakernoteRule('Kyocera', descriptors.KYOCERA, signatures=(b'KYOCERA',), ifd_offset=22,
                  base=BaseOffset.MAKERNOTE),
    MakernoteRule('Leica', descriptors.LEICA, signatures=(b'LEICA',), make_equals='Leica Camera AG',
                  make_case_sensitive=True, ifd_offset=8, byte_order=LITTLE_ENDIAN),
    # Some Leica cameras use Panasonic tags
    MakernoteRule('Leica (Panasonic)', descriptors.PANASONIC, signatures=(b'LEICA',), make_equals='LEICA',
                  make_case_sensitive=True, ifd_offset=8, byte_order=LITTLE_ENDIAN),
    MakernoteRule('Panasonic', descriptors.PANASONIC, signatures=(b'Panasonic\x00\x00\x00',), ifd_offset=12),
    # Casio type 2 tags, offsets relative to the makernote (Pentax *ist D)
    MakernoteRule('Pentax AOC', descriptors.CASIO_TYPE2, signatures=(b'AOC\x00',), ifd_offset=6,
                  base=BaseOffset.MAKERNOTE),
    MakernoteRule('Pentax', descriptors.PENTAX, make_prefix='PENTAX', base=BaseOffset.MAKERNOTE),
    MakernoteRule('Asahi', descriptors.PENTAX, make_prefix='ASAHI', base=BaseOffset.MAKERNOTE),
    MakernoteRule('Sanyo', descriptors.SANYO, signatures=(b'SANYO\x00\x01\x00',), ifd_offset=8,
                  base=BaseOffset.MAKERNOTE),
    # "Rv0103;Rg1C;Bg18;..." text
    MakernoteRule('Ricoh (text)', descriptors.RICOH, signatures=(b'Rv', b'Rev'), make_prefix='RICOH',
                  supported=False),
    MakernoteRule('Ricoh', descriptors.RICOH, signatures=(b'Ricoh',), ignore_case=True, make_prefix='RICOH',
                  ifd_offset=8, base=BaseOffset.MAKERNOTE, byte_order=BIG_ENDIAN),
]


def find_makernote_rule(
    header: bytes,
    make: Optional[str],
    rules: Optional[List[MakernoteRule]] = None
) -> Optional[MakernoteRule]:
    """Return the first rule matching the header and make, or None."""
    for rule in (MAKERNOTE_RULES if rules is None else rules):
        if rule.matches(header, make):
            return rule
    return None


def resolve_makernote_layout(
    reader: ByteReader,
    makernote_offset: int,
    tiff_header_offset: int,
    make: Optional[str],
    rules: Optional[List[MakernoteRule]] = None
) -> Optional[MakernoteLayout]:
    """
    Identify a makernote and work out how to decode it.

    Args:
        reader: Reader over the whole stream, in the enclosing byte order
        makernote_offset: Absolute offset of the makernote value bytes
        tiff_header_offset: Absolute offset of the enclosing TIFF header
        make: Camera make (IFD0 Make tag)
        rules: Rule table to use instead of MAKERNOTE_RULES

    Returns:
        The layout of the first matching rule, or None if no rule matches.
        Check MakernoteLayout.supported before decoding.

    Raises:
        OutOfBoundsError: If the matched rule needs header bytes beyond the buffer
    """
    available = max(0, min(SIGNATURE_LENGTH, reader.length - makernote_offset))
    header = reader.read_bytes(makernote_offset, available) if available else b''

    rule = find_makernote_rule(header, make, rules)
    if rule is None:
        return None
    return rule.layout(reader, makernote_offset, tiff_header_offset)
