# jp2codec

Pure-Python building blocks for JPEG 2000 (JP2 / J2K) codestreams. It has no
dependencies outside the standard library.

## Modules

- `jp2codec.bio` – bit-level `BioWriter` and `BioReader` with the JPEG 2000
  bit-stuffing rule (after a 0xFF byte only seven bits of the next byte carry
  data).
- `jp2codec.mqc` – the MQ arithmetic coder: `MqcEncoder` (with `segmark`,
  bypass mode via `bypass_init` / `bypass_enc` / `bypass_flush`, `erterm` and
  `restart_init`) and `MqcDecoder` (with `MqcDecoder.raw` for raw bits). The
  47-entry probability table is `MQC_STATES`.
- `jp2codec.dwt` – reversible 5/3 and irreversible 9/7 wavelet transforms in
  one and two dimensions, with multi-level decomposition, plus `mirror` for
  symmetric index extension. Every transform returns a new list.
- `jp2codec.mct` – reversible (`rct_forward`, `rct_inverse`) and irreversible
  (`ict_forward`, `ict_inverse`) colour transforms. Each takes three sample
  sequences and returns three new lists.
- `jp2codec.marker` – marker codes (`SOC`, `SIZ`, `COD`, `QCD`, `SOT`, `SOD`,
  `EOC`, …), big-endian read helpers, and reading/writing of the SIZ, COD, QCD
  and SOT segments as dataclasses. Readers take a binary stream positioned
  after the marker code; writers return the whole segment as bytes.
- `jp2codec.htj2k` – `is_htj2k` for the HT code-block style flag, the CAP
  segment (`CapMarker`, `read_cap`, `write_cap`) and the `HtDecoder` state
  record.
- `jp2codec.jp2_box` – JP2 box type constants, box headers (normal and
  extended length), and the IHDR and COLR boxes.
- `jp2codec.codestream` – `read_header`, which parses SIZ, COD and QCD from
  the main header of a codestream into a `J2kHeader`.
- `jp2codec.pi` – `PiIterator`, which yields `PacketIndex` values in any of
  the five `ProgOrder` progression orders.
- `jp2codec.errors` – `Jp2Error` and its subclasses (`InvalidMarkerError`,
  `InvalidDataError`, `UnsupportedFeatureError`, `BufferTooSmallError`,
  `OutOfBoundsError`, `InvalidStateError`).

## Installation

```
pip install .
```

## Examples

Bit I/O:

```python
from jp2codec.bio import BioWriter, BioReader

writer = BioWriter()
writer.write(0b1101, 4)
writer.write(0b0011, 4)
writer.flush()
assert writer.getvalue() == b"\xd3"

reader = BioReader(b"\xd3")
assert reader.read(4) == 0b1101
```

MQ coding round trip:

```python
from jp2codec.mqc import MqcEncoder, MqcDecoder

bits = [0, 1, 1, 0, 1]
encoder = MqcEncoder()
for bit in bits:
    encoder.encode(0, bit)
encoder.flush()

decoder = MqcDecoder(encoder.to_bytes())
assert [decoder.decode(0) for _ in bits] == bits
```

Wavelet and colour transforms:

```python
from jp2codec.dwt import dwt53_forward_2d, dwt53_inverse_2d
from jp2codec.mct import rct_forward, rct_inverse

samples = list(range(64))
coefficients = dwt53_forward_2d(samples, 8, 8, 3)
assert dwt53_inverse_2d(coefficients, 8, 8, 3) == samples

y, cb, cr = rct_forward([10, 20], [30, 40], [50, 60])
assert rct_inverse(y, cb, cr) == ([10, 20], [30, 40], [50, 60])
```

Marker segments:

```python
import io
from jp2codec.marker import CodMarker, write_cod, read_cod

cod = CodMarker(coding_style=0, prog_order=0, num_layers=1, mct=0,
                num_decomp=5, cblk_width_exp=4, cblk_height_exp=4,
                cblk_style=0, transform=1)
segment = write_cod(cod)
assert read_cod(io.BytesIO(segment[2:])) == cod
```

Reading a codestream header:

```python
from jp2codec.codestream import read_header

with open("image.j2k", "rb") as handle:
    header = read_header(handle.read())
print(header.siz.width, header.siz.height, header.cod.num_decomp)
```

Packet order:

```python
from jp2codec.pi import PiImage, PiParams, PiIterator, ProgOrder

image = PiImage(num_comps=1, num_res=[2], num_precincts=[[(1, 1), (1, 1)]])
for packet in PiIterator(image, PiParams(num_layers=1, prog_order=ProgOrder.LRCP)):
    print(packet.layer, packet.res, packet.comp, packet.precinct)
```

## What it does not do

The package holds the pieces of a JPEG 2000 codec, not a complete one. It has
no tier-1 code-block coder, no tier-2 packet coder, no tile coder and no
quantization, so it cannot turn pixels into a `.j2k` or `.jp2` file or decode
one back into pixels. For existing files it reads the main codestream header
and the JP2 boxes listed above; the HT block decoder is not provided. There is
no command-line tool.

## Running the tests

```
pip install .[test]
pytest
```