import pytest

from jp2codec.pi import PacketIndex, PiImage, PiIterator, PiParams, ProgOrder

ORDER_KEYS = {
    ProgOrder.LRCP: lambda p: (p.layer, p.res, p.comp, p.precinct),
    ProgOrder.RLCP: lambda p: (p.res, p.layer, p.comp, p.precinct),
    ProgOrder.RPCL: lambda p: (p.res, p.precinct, p.comp, p.layer),
    ProgOrder.PCRL: lambda p: (p.precinct, p.comp, p.res, p.layer),
    ProgOrder.CPRL: lambda p: (p.comp, p.precinct, p.res, p.layer),
}


def make_image():
    # Two components with different resolution counts and precinct grids.
    return PiImage(
        num_comps=2,
        num_res=[3, 2],
        num_precincts=[
            [(1, 1), (2, 1), (2, 2)],
            [(1, 1), (1, 3)],
        ],
    )


def expected_set(image, num_layers):
    return {
        PacketIndex(layer, res, comp, precinct)
        for layer in range(num_layers)
        for comp in range(image.num_comps)
        for res in range(image.num_res[comp])
        for precinct in range(image.precincts(comp, res))
    }


@pytest.mark.parametrize("order", list(ProgOrder))
def test_every_order_yields_each_packet_once(order):
    image = make_image()
    it = PiIterator(image, PiParams(num_layers=2, prog_order=order))
    packets = list(it.packets())
    assert len(packets) == len(set(packets))
    assert set(packets) == expected_set(image, 2)


@pytest.mark.parametrize("order", list(ProgOrder))
def test_order_follows_nesting(order):
    it = PiIterator(make_image(), PiParams(num_layers=3, prog_order=order))
    packets = list(it.packets())
    assert packets == sorted(packets, key=ORDER_KEYS[order])


@pytest.mark.parametrize("order", list(ProgOrder))
def test_len_matches_iteration(order):
    it = PiIterator(make_image(), PiParams(num_layers=2, prog_order=order))
    total = len(it)
    assert list(it) == list(it.packets())
    assert len(it) == total


def test_iterator_exhausts():
    image = PiImage(num_comps=1, num_res=[1], num_precincts=[[(1, 1)]])
    it = PiIterator(image, PiParams(num_layers=1, prog_order=ProgOrder.LRCP))
    assert next(it) == PacketIndex(0, 0, 0, 0)
    with pytest.raises(StopIteration):
        next(it)


def test_lrcp_small_worked_example():
    image = PiImage(num_comps=1, num_res=[2], num_precincts=[[(1, 1), (1, 1)]])
    it = PiIterator(image, PiParams(num_layers=2, prog_order=ProgOrder.LRCP))
    assert list(it) == [
        PacketIndex(0, 0, 0, 0),
        PacketIndex(0, 1, 0, 0),
        PacketIndex(1, 0, 0, 0),
        PacketIndex(1, 1, 0, 0),
    ]


def test_rlcp_small_worked_example():
    image = PiImage(num_comps=1, num_res=[2], num_precincts=[[(1, 1), (1, 1)]])
    it = PiIterator(image, PiParams(num_layers=2, prog_order=ProgOrder.RLCP))
    assert [(p.res, p.layer) for p in it] == [(0, 0), (0, 1), (1, 0), (1, 1)]


def test_zero_layers_gives_no_packets():
    it = PiIterator(make_image(), PiParams(num_layers=0, prog_order=ProgOrder.PCRL))
    assert len(it) == 0
    assert list(it) == []


def test_prog_order_accepts_codestream_value():
    it = PiIterator(make_image(), PiParams(num_layers=1, prog_order=4))
    packets = list(it.packets())
    assert packets == sorted(packets, key=ORDER_KEYS[ProgOrder.CPRL])


def test_invalid_prog_order_raises():
    with pytest.raises(ValueError):
        PiIterator(make_image(), PiParams(num_layers=1, prog_order=9))


def test_precinct_helpers():
    image = make_image()
    assert image.precincts(0, 2) == 4
    assert image.max_res() == 3
    assert image.max_precincts_at(1) == 3
    assert image.max_precincts_at(2) == 4
    assert image.max_precincts() == 4
    assert image.max_precincts_of(1) == 3


def test_missing_resolution_is_skipped():
    image = make_image()
    it = PiIterator(image, PiParams(num_layers=1, prog_order=ProgOrder.RPCL))
    assert all(p.res < image.num_res[p.comp] for p in it.packets())
    assert not any(p.comp == 1 and p.res == 2 for p in it.packets())