"""MQ arithmetic coder (ITU-T T.800 Annex C).

Context-adaptive binary arithmetic coding, the core of the EBCOT tier-1
coder. The encoder also supports the raw (bypass), error-resilient
termination and restart modes.
"""

from dataclasses import dataclass

NUM_CONTEXTS = 19
_MASK32 = 0xFFFFFFFF


@dataclass(frozen=True)
class MqcState:
    """One probability state: Qe and the transitions after MPS and LPS."""

    qe: int
    nmps: int
    nlps: int
    switch: bool


MQC_STATES = tuple(
    MqcState(qe, nmps, nlps, switch)
    for qe, nmps, nlps, switch in (
        (0x5601, 1, 1, True),
        (0x3401, 2, 6, False),
        (0x1801, 3, 9, False),
        (0x0AC1, 4, 12, False),
        (0x0521, 5, 29, False),
        (0x0221, 38, 33, False),
        (0x5601, 7, 6, True),
        (0x5401, 8, 14, False),
        (0x4801, 9, 14, False),
        (0x3801, 10, 14, False),
        (0x3001, 11, 17, False),
        (0x2401, 12, 18, False),
        (0x1C01, 13, 20, False),
        (0x1601, 29, 21, False),
        (0x5601, 15, 14, True),
        (0x5401, 16, 14, False),
        (0x5101, 17, 15, False),
        (0x4801, 18, 16, False),
        (0x3801, 19, 17, False),
        (0x3401, 20, 18, False),
        (0x3001, 21, 19, False),
        (0x2801, 22, 19, False),
        (0x2401, 23, 20, False),
        (0x2201, 24, 21, False),
        (0x1C01, 25, 22, False),
        (0x1801, 26, 23, False),
        (0x1601, 27, 24, False),
        (0x1401, 28, 25, False),
        (0x1201, 29, 26, False),
        (0x1101, 30, 27, False),
        (0x0AC1, 31, 28, False),
        (0x09C1, 32, 29, False),
        (0x08A1, 33, 30, False),
        (0x0521, 34, 31, False),
        (0x0441, 35, 32, False),
        (0x02A1, 36, 33, False),
        (0x0221, 37, 34, False),
        (0x0141, 38, 35, False),
        (0x0111, 39, 36, False),
        (0x0085, 40, 37, False),
        (0x0049, 41, 38, False),
        (0x0025, 42, 39, False),
        (0x0015, 43, 40, False),
        (0x0009, 44, 41, False),
        (0x0005, 45, 42, False),
        (0x0001, 45, 43, False),
        (0x5601, 46, 46, False),
    )
)


@dataclass
class MqcContext:
    """A context: its probability state index and current MPS value."""

    state: int = 0
    mps: int = 0


def _fresh_contexts():
    return [MqcContext() for _ in range(NUM_CONTEXTS)]


def _reset_contexts(ctxs):
    for ctx in ctxs:
        ctx.state = 0
        ctx.mps = 0


def _set_context(ctxs, ctxno, mps, state):
    ctx = ctxs[ctxno]
    ctx.mps = mps
    ctx.state = state


class MqcEncoder:
    """MQ arithmetic encoder."""

    def __init__(self):
        # A leading dummy byte sits in front of the real output.
        self._buf = bytearray(1)
        self._a = 0x8000
        self._c = 0
        self._ct = 12
        self._bp = 0
        self._ctxs = _fresh_contexts()
        self._cur = 0

    def encode(self, ctx, d):
        """Encode bit ``d`` in context ``ctx``."""
        self._cur = ctx
        if self._ctxs[ctx].mps == d:
            self._codemps()
        else:
            self._codelps()

    def flush(self):
        """Terminate the arithmetic codeword."""
        self._setbits()
        self._c = (self._c << self._ct) & _MASK32
        self._byteout()
        self._c = (self._c << self._ct) & _MASK32
        self._byteout()
        if self._buf[self._bp] != 0xFF:
            self._bp += 1

    def numbytes(self):
        """Number of coded bytes produced."""
        return max(self._bp - 1, 0)

    def to_bytes(self):
        """The coded bytes, without the leading dummy byte."""
        return bytes(self._buf[1:self._bp])

    def resetstates(self):
        """Return every context to state 0 with MPS 0."""
        _reset_contexts(self._ctxs)

    def setstate(self, ctxno, mps, state):
        """Set the MPS and state index of one context."""
        _set_context(self._ctxs, ctxno, mps, state)

    def segmark(self):
        """Encode the segmentation symbol 1010 in context 18."""
        for i in range(1, 5):
            self.encode(18, i % 2)

    def bypass_init(self):
        """Switch to raw bit output; call after ``flush``."""
        self._c = 0
        self._ct = 8

    def bypass_enc(self, d):
        """Write one raw bit without arithmetic coding."""
        self._ct -= 1
        self._c += (d & 1) << self._ct
        if self._ct == 0:
            self._bp += 1
            self._ensure_size()
            self._buf[self._bp] = self._c & 0xFF
            self._ct = 7 if self._buf[self._bp] == 0xFF else 8
            self._c = 0

    def bypass_flush(self, erterm):
        """Terminate raw output, padding with an alternating 0101 pattern."""
        if self._ct < 7 or (self._ct == 7 and (erterm or self._buf[self._bp] != 0xFF)):
            bit_value = 0
            while self._ct > 0:
                self._ct -= 1
                self._c += bit_value << self._ct
                bit_value = 1 - bit_value
            self._bp += 1
            self._ensure_size()
            self._buf[self._bp] = self._c & 0xFF
        elif self._ct == 7 and self._buf[self._bp] == 0xFF:
            self._bp -= 1
        elif (
            self._ct == 8
            and not erterm
            and self._bp >= 2
            and self._buf[self._bp] == 0x7F
            and self._buf[self._bp - 1] == 0xFF
        ):
            self._bp -= 2
        self._bp += 1

    def erterm(self):
        """Terminate with the predictable error-resilient pattern."""
        k = 11 - self._ct + 1
        while k > 0:
            self._c = (self._c << self._ct) & _MASK32
            self._ct = 0
            self._byteout()
            k -= self._ct
        if self._buf[self._bp] != 0xFF:
            self._byteout()

    def restart_init(self):
        """Start a new arithmetic segment after ``flush``."""
        self._a = 0x8000
        self._c = 0
        self._ct = 12
        self._bp -= 1
        if self._buf[self._bp] == 0xFF:
            self._ct = 13

    def _codemps(self):
        ctx = self._ctxs[self._cur]
        entry = MQC_STATES[ctx.state]
        qe = entry.qe
        self._a -= qe
        if self._a & 0x8000 == 0:
            if self._a < qe:
                self._a = qe
            else:
                self._c += qe
            ctx.state = entry.nmps
            self._renorme()
        else:
            self._c += qe

    def _codelps(self):
        ctx = self._ctxs[self._cur]
        entry = MQC_STATES[ctx.state]
        qe = entry.qe
        self._a -= qe
        if self._a < qe:
            self._c += qe
        else:
            self._a = qe
        if entry.switch:
            ctx.mps ^= 1
        ctx.state = entry.nlps
        self._renorme()

    def _renorme(self):
        while True:
            self._a = (self._a << 1) & _MASK32
            self._c = (self._c << 1) & _MASK32
            self._ct -= 1
            if self._ct == 0:
                self._byteout()
            if self._a & 0x8000:
                break

    def _emit(self, shift, mask, ct):
        self._bp += 1
        self._ensure_size()
        self._buf[self._bp] = (self._c >> shift) & 0xFF
        self._c &= mask
        self._ct = ct

    def _byteout(self):
        if self._buf[self._bp] == 0xFF:
            self._emit(20, 0xFFFFF, 7)
        elif self._c & 0x8000000 == 0:
            self._emit(19, 0x7FFFF, 8)
        else:
            self._buf[self._bp] += 1
            if self._buf[self._bp] == 0xFF:
                self._c &= 0x7FFFFFF
                self._emit(20, 0xFFFFF, 7)
            else:
                self._emit(19, 0x7FFFF, 8)

    def _setbits(self):
        tempc = (self._c + self._a) & _MASK32
        self._c |= 0xFFFF
        if self._c >= tempc:
            self._c -= 0x8000

    def _ensure_size(self):
        if self._bp >= len(self._buf):
            self._buf.extend(bytes(self._bp - len(self._buf) + 1))


class MqcDecoder:
    """MQ arithmetic decoder."""

    def __init__(self, data):
        self._load(data)
        if data:
            self._c = self._data[0] << 16
        else:
            self._c = 0xFF << 16
        self._bytein()
        self._c = (self._c << 7) & _MASK32
        self._ct = max(self._ct - 7, 0)
        self._a = 0x8000

    @classmethod
    def raw(cls, data):
        """A decoder that reads raw (bypass) bits."""
        decoder = cls.__new__(cls)
        decoder._load(data)
        return decoder

    def _load(self, data):
        # Two 0xFF bytes act as a sentinel past the end of the input.
        self._data = bytes(data) + b"\xff\xff"
        self._bp = 0
        self._a = 0
        self._c = 0
        self._ct = 0
        self._ctxs = _fresh_contexts()
        self._cur = 0

    def resetstates(self):
        """Return every context to state 0 with MPS 0."""
        _reset_contexts(self._ctxs)

    def setstate(self, ctxno, mps, state):
        """Set the MPS and state index of one context."""
        _set_context(self._ctxs, ctxno, mps, state)

    def decode(self, ctx):
        """Decode one bit in context ``ctx``."""
        self._cur = ctx
        qe = MQC_STATES[self._ctxs[ctx].state].qe
        self._a -= qe
        if (self._c >> 16) < qe:
            d = self._lpsexchange()
            self._renormd()
        else:
            self._c -= qe << 16
            if self._a & 0x8000 == 0:
                d = self._mpsexchange()
                self._renormd()
            else:
                d = self._ctxs[ctx].mps
        return d

    def raw_decode(self):
        """Read one raw bit."""
        if self._ct == 0:
            if self._c == 0xFF:
                if self._data[self._bp] > 0x8F:
                    self._c = 0xFF
                    self._ct = 8
                else:
                    self._c = self._data[self._bp]
                    self._bp += 1
                    self._ct = 7
            else:
                self._c = self._data[self._bp]
                self._bp += 1
                self._ct = 8
        self._ct -= 1
        return (self._c >> self._ct) & 1

    def _take_lps(self, ctx, entry):
        d = 1 - ctx.mps
        if entry.switch:
            ctx.mps ^= 1
        ctx.state = entry.nlps
        return d

    def _take_mps(self, ctx, entry):
        d = ctx.mps
        ctx.state = entry.nmps
        return d

    def _mpsexchange(self):
        ctx = self._ctxs[self._cur]
        entry = MQC_STATES[ctx.state]
        if self._a < entry.qe:
            return self._take_lps(ctx, entry)
        return self._take_mps(ctx, entry)

    def _lpsexchange(self):
        ctx = self._ctxs[self._cur]
        entry = MQC_STATES[ctx.state]
        low_interval = self._a < entry.qe
        self._a = entry.qe
        if low_interval:
            return self._take_mps(ctx, entry)
        return self._take_lps(ctx, entry)

    def _renormd(self):
        while True:
            if self._ct == 0:
                self._bytein()
            self._a = (self._a << 1) & _MASK32
            self._c = (self._c << 1) & _MASK32
            self._ct -= 1
            if self._a >= 0x8000:
                break

    def _bytein(self):
        next_byte = self._data[self._bp + 1]
        if self._data[self._bp] == 0xFF:
            if next_byte > 0x8F:
                self._c += 0xFF00
                self._ct = 8
            else:
                self._bp += 1
                self._c += next_byte << 9
                self._ct = 7
        else:
            self._bp += 1
            self._c += next_byte << 8
            self._ct = 8