"""Codestream marker codes and the main marker segments.

Readers take a binary stream positioned just after the marker code (the
segment length comes first) and return a dataclass. Writers return the
complete segment as bytes, marker code included.
"""

import struct
from dataclasses import dataclass, field

from .errors import InvalidDataError, InvalidMarkerError, OutOfBoundsError

SOC = 0xFF4F  # start of codestream
SOT = 0xFF90  # start of tile-part
SOD = 0xFF93  # start of data
EOC = 0xFFD9  # end of codestream
SIZ = 0xFF51  # image and tile size
COD = 0xFF52  # coding style default
COC = 0xFF53  # coding style component
QCD = 0xFF5C  # quantization default
QCC = 0xFF5D  # quantization component
POC = 0xFF5F  # progression order change
COM = 0xFF64  # comment
SOP = 0xFF91  # start of packet
EPH = 0xFF92  # end of packet header


def read_exact(stream, size):
    """Read exactly ``size`` bytes or raise OutOfBoundsError."""
    offset = stream.tell()
    data = stream.read(size)
    if len(data) < size:
        raise OutOfBoundsError(offset, size)
    return data


def read_u8(stream):
    """Read one unsigned byte."""
    return read_exact(stream, 1)[0]


def read_u16(stream):
    """Read a big-endian 16-bit unsigned integer."""
    return struct.unpack(">H", read_exact(stream, 2))[0]


def read_u32(stream):
    """Read a big-endian 32-bit unsigned integer."""
    return struct.unpack(">I", read_exact(stream, 4))[0]


def read_u64(stream):
    """Read a big-endian 64-bit unsigned integer."""
    return struct.unpack(">Q", read_exact(stream, 8))[0]


def read_marker(stream):
    """Read a two-byte marker code; its high byte must be 0xFF."""
    marker = read_u16(stream)
    if marker & 0xFF00 != 0xFF00:
        raise InvalidMarkerError(marker)
    return marker


@dataclass
class SizComponent:
    """Per-component SIZ data; bit 7 of ``precision`` is the sign flag."""

    precision: int
    dx: int
    dy: int


@dataclass
class SizMarker:
    """Image and tile size parameters."""

    profile: int
    width: int
    height: int
    x_offset: int
    y_offset: int
    tile_width: int
    tile_height: int
    tile_x_offset: int
    tile_y_offset: int
    comps: list = field(default_factory=list)

    @property
    def num_comps(self):
        """Number of image components."""
        return len(self.comps)


@dataclass
class CodMarker:
    """Default coding style parameters."""

    coding_style: int
    prog_order: int
    num_layers: int
    mct: int
    num_decomp: int
    cblk_width_exp: int
    cblk_height_exp: int
    cblk_style: int
    transform: int


@dataclass
class QcdMarker:
    """Default quantization: style byte and step sizes."""

    quant_style: int
    stepsizes: list = field(default_factory=list)


@dataclass
class SotMarker:
    """Start of tile-part parameters."""

    tile_index: int
    tile_part_len: int
    tile_part_no: int
    num_tile_parts: int


def read_siz(stream):
    """Read a SIZ segment."""
    length = read_u16(stream)
    if length < 41:
        raise InvalidDataError("SIZ marker too short")
    profile = read_u16(stream)
    (width, height, x_offset, y_offset, tile_width, tile_height,
     tile_x_offset, tile_y_offset) = struct.unpack(">8I", read_exact(stream, 32))
    num_comps = read_u16(stream)
    if num_comps == 0:
        raise InvalidDataError("SIZ: zero components")
    expected = 38 + 3 * num_comps
    if length < expected:
        raise InvalidDataError(
            f"SIZ marker length mismatch: got {length}, expected at least {expected}"
        )
    comps = [SizComponent(*read_exact(stream, 3)) for _ in range(num_comps)]
    return SizMarker(
        profile=profile,
        width=width,
        height=height,
        x_offset=x_offset,
        y_offset=y_offset,
        tile_width=tile_width,
        tile_height=tile_height,
        tile_x_offset=tile_x_offset,
        tile_y_offset=tile_y_offset,
        comps=comps,
    )


def write_siz(siz):
    """Encode a SIZ segment, marker code included."""
    length = (38 + 3 * siz.num_comps) & 0xFFFF
    out = bytearray(struct.pack(
        ">HHH8IH",
        SIZ,
        length,
        siz.profile,
        siz.width,
        siz.height,
        siz.x_offset,
        siz.y_offset,
        siz.tile_width,
        siz.tile_height,
        siz.tile_x_offset,
        siz.tile_y_offset,
        siz.num_comps,
    ))
    for comp in siz.comps:
        out += bytes((comp.precision & 0xFF, comp.dx & 0xFF, comp.dy & 0xFF))
    return bytes(out)


def read_cod(stream):
    """Read a COD segment."""
    length = read_u16(stream)
    if length < 12:
        raise InvalidDataError("COD marker too short")
    (coding_style, prog_order, num_layers, mct, num_decomp, cblk_width_exp,
     cblk_height_exp, cblk_style, transform) = struct.unpack(">BBHBBBBBB", read_exact(stream, 10))
    return CodMarker(
        coding_style=coding_style,
        prog_order=prog_order,
        num_layers=num_layers,
        mct=mct,
        num_decomp=num_decomp,
        cblk_width_exp=cblk_width_exp,
        cblk_height_exp=cblk_height_exp,
        cblk_style=cblk_style,
        transform=transform,
    )


def write_cod(cod):
    """Encode a COD segment, marker code included."""
    return struct.pack(
        ">HHBBHBBBBBB",
        COD,
        12,
        cod.coding_style,
        cod.prog_order,
        cod.num_layers,
        cod.mct,
        cod.num_decomp,
        cod.cblk_width_exp,
        cod.cblk_height_exp,
        cod.cblk_style,
        cod.transform,
    )


def read_qcd(stream):
    """Read a QCD segment.

    Without quantization each step size is one byte; otherwise two.
    """
    length = read_u16(stream)
    if length < 3:
        raise InvalidDataError("QCD marker too short")
    quant_style = read_u8(stream)
    remaining = length - 3
    if quant_style & 0x1F == 0:
        stepsizes = list(read_exact(stream, remaining))
    else:
        count = remaining // 2
        stepsizes = list(struct.unpack(f">{count}H", read_exact(stream, 2 * count)))
    return QcdMarker(quant_style=quant_style, stepsizes=stepsizes)


def write_qcd(qcd):
    """Encode a QCD segment, marker code included."""
    if qcd.quant_style & 0x1F == 0:
        steps = bytes(s & 0xFF for s in qcd.stepsizes)
    else:
        steps = b"".join(struct.pack(">H", s & 0xFFFF) for s in qcd.stepsizes)
    length = (3 + len(steps)) & 0xFFFF
    return struct.pack(">HHB", QCD, length, qcd.quant_style) + steps


def read_sot(stream):
    """Read a SOT segment; its length field must be 10."""
    length = read_u16(stream)
    if length != 10:
        raise InvalidDataError(f"SOT marker length should be 10, got {length}")
    tile_index, tile_part_len, tile_part_no, num_tile_parts = struct.unpack(
        ">HIBB", read_exact(stream, 8)
    )
    return SotMarker(
        tile_index=tile_index,
        tile_part_len=tile_part_len,
        tile_part_no=tile_part_no,
        num_tile_parts=num_tile_parts,
    )


def write_sot(sot):
    """Encode a SOT segment, marker code included."""
    return struct.pack(
        ">HHHIBB",
        SOT,
        10,
        sot.tile_index,
        sot.tile_part_len,
        sot.tile_part_no,
        sot.num_tile_parts,
    )