"""Exception hierarchy raised by the codec."""


class Jp2Error(Exception):
    """Base class for every error raised by the codec."""

    prefix = ""

    def __init__(self, message=""):
        self.message = message
        super().__init__(f"{self.prefix}: {message}" if self.prefix else message)


class InvalidMarkerError(Jp2Error):
    """A two-byte value was read where a marker code was expected."""

    prefix = "invalid marker"

    def __init__(self, marker):
        self.marker = marker
        super().__init__(f"0x{marker:04X}")


class InvalidDataError(Jp2Error):
    """The input is structurally wrong."""

    prefix = "invalid data"


class UnsupportedFeatureError(Jp2Error):
    """The input uses a feature the codec does not handle."""

    prefix = "unsupported feature"


class BufferTooSmallError(Jp2Error):
    """A buffer holds fewer bytes than an operation needs."""

    prefix = "buffer too small"

    def __init__(self, need, have):
        self.need = need
        self.have = have
        super().__init__(f"need {need}, have {have}")


class OutOfBoundsError(Jp2Error):
    """A read went past the end of the available data."""

    prefix = "out of bounds"

    def __init__(self, offset, length):
        self.offset = offset
        self.length = length
        super().__init__(f"offset {offset}, length {length}")


class InvalidStateError(Jp2Error):
    """An object was used in a state that does not allow the operation."""

    prefix = "invalid state"