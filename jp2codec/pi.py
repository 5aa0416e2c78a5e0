"""Packet iteration in the five progression orders.

A progression order decides the nesting of layers (L), resolutions (R),
components (C) and precincts (P) when packets are written or read.
"""

from dataclasses import dataclass, field
from enum import Enum


class ProgOrder(Enum):
    """Progression orders, with their codestream values."""

    LRCP = 0
    RLCP = 1
    RPCL = 2
    PCRL = 3
    CPRL = 4


@dataclass
class PiImage:
    """Component layout needed to enumerate packets.

    ``num_res[c]`` is the number of resolution levels of component ``c`` and
    ``num_precincts[c][r]`` is its ``(wide, high)`` precinct count at
    resolution ``r``.
    """

    num_comps: int
    num_res: list = field(default_factory=list)
    num_precincts: list = field(default_factory=list)

    def precincts(self, comp, res):
        """Total number of precincts of ``comp`` at ``res``."""
        wide, high = self.num_precincts[comp][res]
        return wide * high

    def max_res(self):
        """Largest resolution count over all components."""
        return max(self.num_res, default=0)

    def has_res(self, comp, res):
        """True when ``comp`` has a resolution level ``res``."""
        return res < self.num_res[comp]

    def max_precincts_at(self, res):
        """Largest precinct count at ``res`` over the components that have it."""
        return max(
            (self.precincts(c, res) for c in range(self.num_comps) if self.has_res(c, res)),
            default=0,
        )

    def max_precincts_of(self, comp):
        """Largest precinct count over the resolutions of ``comp``."""
        return max(
            (self.precincts(comp, r) for r in range(self.num_res[comp])),
            default=0,
        )

    def max_precincts(self):
        """Largest precinct count over every component and resolution."""
        return max(
            (self.max_precincts_of(c) for c in range(self.num_comps)),
            default=0,
        )


@dataclass
class PiParams:
    """Coding parameters that drive packet order."""

    num_layers: int
    prog_order: ProgOrder


@dataclass(frozen=True)
class PacketIndex:
    """Identifies one packet."""

    layer: int
    res: int
    comp: int
    precinct: int


def _lrcp(image, num_layers):
    for layer in range(num_layers):
        for res in range(image.max_res()):
            for comp in range(image.num_comps):
                if not image.has_res(comp, res):
                    continue
                for precinct in range(image.precincts(comp, res)):
                    yield PacketIndex(layer, res, comp, precinct)


def _rlcp(image, num_layers):
    for res in range(image.max_res()):
        for layer in range(num_layers):
            for comp in range(image.num_comps):
                if not image.has_res(comp, res):
                    continue
                for precinct in range(image.precincts(comp, res)):
                    yield PacketIndex(layer, res, comp, precinct)


def _rpcl(image, num_layers):
    for res in range(image.max_res()):
        for precinct in range(image.max_precincts_at(res)):
            for comp in range(image.num_comps):
                if not image.has_res(comp, res) or precinct >= image.precincts(comp, res):
                    continue
                for layer in range(num_layers):
                    yield PacketIndex(layer, res, comp, precinct)


def _pcrl(image, num_layers):
    for precinct in range(image.max_precincts()):
        for comp in range(image.num_comps):
            for res in range(image.num_res[comp]):
                if precinct >= image.precincts(comp, res):
                    continue
                for layer in range(num_layers):
                    yield PacketIndex(layer, res, comp, precinct)


def _cprl(image, num_layers):
    for comp in range(image.num_comps):
        for precinct in range(image.max_precincts_of(comp)):
            for res in range(image.num_res[comp]):
                if precinct >= image.precincts(comp, res):
                    continue
                for layer in range(num_layers):
                    yield PacketIndex(layer, res, comp, precinct)


_GENERATORS = {
    ProgOrder.LRCP: _lrcp,
    ProgOrder.RLCP: _rlcp,
    ProgOrder.RPCL: _rpcl,
    ProgOrder.PCRL: _pcrl,
    ProgOrder.CPRL: _cprl,
}


class PiIterator:
    """Yields the packets of an image in the chosen progression order."""

    def __init__(self, image, params):
        self.image = image
        self.params = params
        generate = _GENERATORS[ProgOrder(params.prog_order)]
        self._packets = tuple(generate(image, params.num_layers))
        self._pos = 0

    def __iter__(self):
        return self

    def __next__(self):
        if self._pos >= len(self._packets):
            raise StopIteration
        packet = self._packets[self._pos]
        self._pos += 1
        return packet

    def __len__(self):
        """Total number of packets, regardless of iteration progress."""
        return len(self._packets)

    def packets(self):
        """Every packet, in order."""
        return self._packets