"""High-throughput block coding (Part 15) support: the CAP marker segment
and detection of the HT code-block style flag."""

import struct
from dataclasses import dataclass, field

from .errors import InvalidDataError
from .marker import read_exact, read_u16, read_u32

_HT_FLAG = 0x40


@dataclass
class HtDecoder:
    """State of the MEL, VLC and MagSgn sub-decoders of an HT code-block."""

    mel_run: int = 0
    mel_remaining: int = 0
    vlc_bits: int = 0
    vlc_pos: int = 0
    magsgn_bits: int = 0
    magsgn_pos: int = 0


@dataclass
class CapMarker:
    """Extended capabilities: a Pcap bitmask and one Ccap word per set bit."""

    pcap: int
    ccap: list = field(default_factory=list)


def is_htj2k(cblk_style):
    """True when the code-block style byte selects the HT block coder."""
    return bool(cblk_style & _HT_FLAG)


def _popcount(value):
    return bin(value).count("1")


def read_cap(stream):
    """Read a CAP segment (length field first, marker code already consumed)."""
    lcap = read_u16(stream)
    if lcap < 6:
        raise InvalidDataError("CAP marker segment too short")
    pcap = read_u32(stream)
    num_ccap = _popcount(pcap)
    expected = 6 + 2 * num_ccap
    if lcap != expected:
        raise InvalidDataError(
            f"CAP marker length mismatch: Lcap={lcap}, expected={expected}"
        )
    ccap = list(struct.unpack(f">{num_ccap}H", read_exact(stream, 2 * num_ccap)))
    return CapMarker(pcap=pcap, ccap=ccap)


def write_cap(cap):
    """Encode a CAP segment without its marker code."""
    lcap = 6 + 2 * _popcount(cap.pcap)
    out = struct.pack(">HI", lcap & 0xFFFF, cap.pcap)
    return out + b"".join(struct.pack(">H", c) for c in cap.ccap)