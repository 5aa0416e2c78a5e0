"""Reading the main header of a raw JPEG 2000 codestream."""

import io
from dataclasses import dataclass

from .errors import InvalidDataError
from .marker import (
    COD,
    COM,
    EOC,
    QCD,
    SIZ,
    SOC,
    SOD,
    SOT,
    CodMarker,
    QcdMarker,
    SizMarker,
    read_cod,
    read_exact,
    read_marker,
    read_qcd,
    read_siz,
    read_u16,
)


@dataclass
class J2kHeader:
    """The main header segments needed to decode a codestream."""

    siz: SizMarker
    cod: CodMarker
    qcd: QcdMarker


def _remaining(stream, total):
    return total - stream.tell()


def _skip_segment(stream):
    length = read_u16(stream)
    if length >= 2:
        read_exact(stream, length - 2)


def read_header(data):
    """Parse SIZ, COD and QCD from the main header of a codestream.

    Parsing stops at the first SOT, SOD or EOC marker, or at the end of the
    data. Comments and unknown marker segments are skipped.
    """
    data = bytes(data)
    total = len(data)
    stream = io.BytesIO(data)

    soc = read_marker(stream)
    if soc != SOC:
        raise InvalidDataError(f"expected SOC (0xFF4F), got 0x{soc:04X}")

    siz = cod = qcd = None
    while _remaining(stream, total) >= 2:
        marker = read_marker(stream)
        if marker == SIZ:
            siz = read_siz(stream)
        elif marker == COD:
            cod = read_cod(stream)
        elif marker == QCD:
            qcd = read_qcd(stream)
        elif marker == COM:
            _skip_segment(stream)
        elif marker in (SOT, SOD, EOC):
            break
        elif _remaining(stream, total) >= 2:
            _skip_segment(stream)

    if siz is None:
        raise InvalidDataError("missing SIZ marker")
    if cod is None:
        raise InvalidDataError("missing COD marker")
    if qcd is None:
        raise InvalidDataError("missing QCD marker")
    return J2kHeader(siz=siz, cod=cod, qcd=qcd)