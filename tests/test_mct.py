import pytest

from jp2codec.mct import ict_forward, ict_inverse, rct_forward, rct_inverse


def _channels(size):
    r = [(i * 31 + 7) % 256 for i in range(size)]
    g = [(i * 17 + 13) % 256 for i in range(size)]
    b = [(i * 41 + 3) % 256 for i in range(size)]
    return r, g, b


@pytest.mark.parametrize("size", [0, 1, 3, 4, 7, 8, 15, 16, 100, 1024, 1025])
def test_rct_roundtrip_various_sizes(size):
    r, g, b = _channels(size)
    assert rct_inverse(*rct_forward(r, g, b)) == (r, g, b)


def test_rct_roundtrip_17():
    r = [i * 10 + 5 for i in range(17)]
    g = [i * 7 + 20 for i in range(17)]
    b = [i * 13 + 3 for i in range(17)]
    assert rct_inverse(*rct_forward(r, g, b)) == (r, g, b)


def test_rct_roundtrip_100():
    r = [(i * 31) % 256 for i in range(100)]
    g = [(i * 17) % 256 for i in range(100)]
    b = [(i * 41) % 256 for i in range(100)]
    assert rct_inverse(*rct_forward(r, g, b)) == (r, g, b)


def test_rct_forward_worked_example():
    assert rct_forward([5], [20], [3]) == ([12], [-17], [-15])


def test_rct_forward_grey_has_no_chroma():
    grey = [0, 17, 128, 255]
    y, cb, cr = rct_forward(grey, grey, grey)
    assert y == grey
    assert cb == [0, 0, 0, 0]
    assert cr == [0, 0, 0, 0]


def test_rct_uses_shortest_length():
    y, cb, cr = rct_forward([1, 2], [1], [1, 2, 3])
    assert (len(y), len(cb), len(cr)) == (1, 1, 1)


def test_ict_grey_has_luma_only():
    grey = [0.0, 64.0, 200.0]
    y, cb, cr = ict_forward(grey, grey, grey)
    assert y == pytest.approx(grey, abs=1e-3)
    assert cb == pytest.approx([0.0] * 3, abs=1e-2)
    assert cr == pytest.approx([0.0] * 3, abs=1e-2)


def test_ict_roundtrip_is_close():
    r, g, b = _channels(50)
    back = ict_inverse(*ict_forward(r, g, b))
    for original, restored in zip((r, g, b), back):
        assert restored == pytest.approx(original, abs=0.1)