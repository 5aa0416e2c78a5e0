"""Bit-level input and output with the JPEG 2000 bit-stuffing rule.

After a 0xFF byte only seven bits of the following byte carry data; its most
significant bit is forced to zero.
"""

from .errors import OutOfBoundsError


class BioWriter:
    """Writes bits MSB first into a growing byte buffer."""

    def __init__(self):
        self._buf = bytearray()
        self._acc = 0
        self._bits = 8
        self._last_was_ff = False

    def putbit(self, bit):
        """Write a single bit (only the lowest bit of ``bit`` is used)."""
        if self._bits == 0:
            self._byteout()
        self._bits -= 1
        self._acc |= (bit & 1) << self._bits

    def write(self, value, nbits):
        """Write the lowest ``nbits`` bits of ``value``, MSB first."""
        for shift in reversed(range(nbits)):
            self.putbit(value >> shift)

    def flush(self):
        """Pad the current byte with zero bits and emit it."""
        if self._bits < 8:
            self._byteout()

    def numbytes(self):
        """Number of bytes emitted so far."""
        return len(self._buf)

    def getvalue(self):
        """The bytes emitted so far."""
        return bytes(self._buf)

    def _byteout(self):
        byte = self._acc & 0xFF
        self._buf.append(byte)
        self._last_was_ff = byte == 0xFF
        self._acc = 0
        self._bits = 7 if self._last_was_ff else 8


class BioReader:
    """Reads bits MSB first from a byte string."""

    def __init__(self, data):
        self._data = bytes(data)
        self._pos = 0
        self._acc = 0
        self._bits = 0
        self._last_was_ff = False

    def getbit(self):
        """Read one bit; raise OutOfBoundsError at the end of the data."""
        if self._bits == 0:
            self._bytein()
        self._bits -= 1
        return (self._acc >> self._bits) & 1

    def read(self, nbits):
        """Read ``nbits`` bits, MSB first, as an integer."""
        value = 0
        for _ in range(nbits):
            value = (value << 1) | self.getbit()
        return value

    def inalign(self):
        """Discard the rest of the current byte."""
        self._bits = 0
        self._last_was_ff = False

    def numbytes(self):
        """Number of bytes consumed so far."""
        return self._pos

    def _bytein(self):
        if self._pos >= len(self._data):
            raise OutOfBoundsError(self._pos, 1)
        self._acc = self._data[self._pos]
        self._pos += 1
        self._bits = 7 if self._last_was_ff else 8
        self._last_was_ff = self._acc == 0xFF