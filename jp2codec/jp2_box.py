"""Boxes of the JP2 file format that wrap a codestream."""

import struct
from dataclasses import dataclass

from .errors import UnsupportedFeatureError
from .marker import read_exact, read_u32, read_u64

JP2_JP = 0x6A502020  # JPEG 2000 signature
JP2_FTYP = 0x66747970  # file type
JP2_JP2H = 0x6A703268  # JP2 header (super box)
JP2_IHDR = 0x69686472  # image header
JP2_COLR = 0x636F6C72  # colour specification
JP2_JP2C = 0x6A703263  # contiguous codestream
JP2_PCLR = 0x70636C72  # palette
JP2_CMAP = 0x636D6170  # component mapping
JP2_CDEF = 0x63646566  # channel definition
JP2_RES = 0x72657320  # resolution (super box)

JP2_SIGNATURE = 0x0D0A870A
JP2_BRAND = 0x6A703220

CS_SRGB = 16
CS_GRAYSCALE = 17
CS_YCC = 18


@dataclass
class BoxHeader:
    """A box header; ``length`` covers the header too, 0 means to end of file."""

    box_type: int
    length: int
    header_size: int


@dataclass
class IhdrBox:
    """Image header box contents."""

    height: int
    width: int
    num_comps: int
    bpc: int
    compression: int = 7
    unk_colorspace: int = 0
    ipr: int = 0


@dataclass
class ColrBox:
    """Colour specification: method 1 is enumerated, method 2 an ICC profile."""

    method: int
    precedence: int = 0
    approx: int = 0
    enum_cs: int = None
    icc_profile: bytes = None


def read_box_header(stream):
    """Read a box header, following the extended length form when present."""
    lbox = read_u32(stream)
    tbox = read_u32(stream)
    if lbox == 1:
        return BoxHeader(box_type=tbox, length=read_u64(stream), header_size=16)
    return BoxHeader(box_type=tbox, length=lbox, header_size=8)


def write_box_header(box_type, data_len):
    """An 8-byte box header for ``data_len`` bytes of content."""
    return struct.pack(">II", (data_len + 8) & 0xFFFFFFFF, box_type)


def write_box_header_xl(box_type, data_len):
    """A 16-byte extended-length box header for ``data_len`` bytes of content."""
    return struct.pack(">IIQ", 1, box_type, data_len + 16)


def read_ihdr(stream):
    """Read the 14-byte IHDR payload; only compression type 7 is accepted."""
    (height, width, num_comps, bpc, compression, unk_colorspace,
     ipr) = struct.unpack(">IIHBBBB", read_exact(stream, 14))
    if compression != 7:
        raise UnsupportedFeatureError(f"IHDR compression type {compression}, expected 7")
    return IhdrBox(
        height=height,
        width=width,
        num_comps=num_comps,
        bpc=bpc,
        compression=compression,
        unk_colorspace=unk_colorspace,
        ipr=ipr,
    )


def write_ihdr(ihdr):
    """Encode the 14-byte IHDR payload."""
    return struct.pack(
        ">IIHBBBB",
        ihdr.height,
        ihdr.width,
        ihdr.num_comps,
        ihdr.bpc,
        ihdr.compression,
        ihdr.unk_colorspace,
        ihdr.ipr,
    )


def read_colr(stream, payload_len):
    """Read a COLR payload of ``payload_len`` bytes."""
    method, precedence, approx = read_exact(stream, 3)
    if method == 1:
        return ColrBox(method, precedence, approx, enum_cs=read_u32(stream))
    if method == 2:
        profile = read_exact(stream, max(payload_len - 3, 0))
        return ColrBox(method, precedence, approx, icc_profile=profile)
    raise UnsupportedFeatureError(f"COLR method {method}")


def write_colr(colr):
    """Encode a COLR payload."""
    out = bytes((colr.method, colr.precedence, colr.approx))
    if colr.method == 1 and colr.enum_cs is not None:
        out += struct.pack(">I", colr.enum_cs)
    elif colr.method == 2 and colr.icc_profile is not None:
        out += bytes(colr.icc_profile)
    return out