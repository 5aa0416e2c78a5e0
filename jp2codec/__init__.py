"""JPEG 2000 building blocks: bit I/O, MQ coding, wavelets, colour transforms, packet order and header parsing."""

__version__ = "0.1.0"

__all__ = [
    "bio",
    "codestream",
    "dwt",
    "errors",
    "htj2k",
    "jp2_box",
    "marker",
    "mct",
    "mqc",
    "pi",
]