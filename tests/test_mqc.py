import pytest

from jp2codec.mqc import MQC_STATES, MqcDecoder, MqcEncoder


def _encode(pairs, setup=None):
    enc = MqcEncoder()
    if setup:
        setup(enc)
    for ctx, bit in pairs:
        enc.encode(ctx, bit)
    enc.flush()
    return enc


def _decode(data, contexts, setup=None):
    dec = MqcDecoder(data)
    if setup:
        setup(dec)
    return [dec.decode(ctx) for ctx in contexts]


def test_state_table_drives_roundtrip_from_every_state():
    assert len(MQC_STATES) == 47
    assert MQC_STATES[0].qe == 0x5601
    bits = [1, 0, 0, 1, 1, 1, 0, 1, 0, 0]
    for index, s in enumerate(MQC_STATES):
        assert 0 <= s.nmps < 47
        assert 0 <= s.nlps < 47

        def setup(coder, index=index):
            coder.setstate(0, 0, index)

        data = _encode([(0, b) for b in bits], setup).to_bytes()
        assert _decode(data, [0] * len(bits), setup) == bits


def test_uniform_state_roundtrip():
    s = MQC_STATES[46]
    assert (s.qe, s.nmps, s.nlps, s.switch) == (0x5601, 46, 46, False)

    def setup(coder):
        coder.setstate(0, 0, 46)

    bits = [1, 1, 0, 1, 0, 0, 0, 1] * 4
    data = _encode([(0, b) for b in bits], setup).to_bytes()
    assert _decode(data, [0] * len(bits), setup) == bits


def test_encode_single_bit():
    enc = _encode([(0, 0)])
    assert enc.numbytes() > 0


def test_encode_sequence():
    enc = _encode([(0, i % 2) for i in range(20)])
    assert enc.numbytes() > 0
    assert enc.numbytes() == len(enc.to_bytes())


def test_flush_produces_valid():
    data = _encode([(0, 1), (0, 0), (0, 1)]).to_bytes()
    assert len(data) > 0
    assert data[-1] != 0xFF


def test_numbytes_after_encode():
    n1 = _encode([]).numbytes()
    n2 = _encode([(0, 1)] * 100).numbytes()
    assert n2 >= n1


def test_context_switching():
    enc = _encode([(0, 1), (1, 0), (2, 1), (0, 0)])
    assert enc.numbytes() > 0


def test_resetstates_matches_fresh_encoder():
    fresh = _encode([(0, 0), (0, 1), (0, 1)]).to_bytes()

    def setup(enc):
        enc.setstate(0, 1, 10)
        enc.resetstates()

    reset = _encode([(0, 0), (0, 1), (0, 1)], setup).to_bytes()
    assert reset == fresh


def test_decoder_resetstates_matches_fresh_decoder():
    bits = [0, 1, 1, 0, 1]
    data = _encode([(0, b) for b in bits]).to_bytes()

    def setup(dec):
        dec.setstate(0, 1, 10)
        dec.resetstates()

    assert _decode(data, [0] * len(bits), setup) == bits


def test_bypass_mode_encode():
    enc = _encode([(0, 1), (0, 0)])
    enc.bypass_init()
    for b in [1, 0, 1, 1, 0, 0, 1, 0]:
        enc.bypass_enc(b)
    enc.bypass_flush(False)
    assert len(enc.to_bytes()) > 0


def test_bypass_mode_roundtrip_produces_data():
    enc = _encode([(0, 0)])
    enc.bypass_init()
    for b in [1, 0, 1, 1, 0, 1, 0, 0, 1, 1, 0, 1, 0, 1, 1, 0]:
        enc.bypass_enc(b)
    enc.bypass_flush(False)
    assert len(enc.to_bytes()) >= 2


def test_erterm_flush():
    enc = MqcEncoder()
    for i in range(30):
        enc.encode(0, i % 2)
    enc.erterm()
    data = enc.to_bytes()
    assert len(data) > 0
    assert _decode(data, [0] * 30) == [i % 2 for i in range(30)]


def test_decode_single_bit():
    data = _encode([(0, 1)]).to_bytes()
    assert _decode(data, [0]) == [1]


def test_encode_decode_roundtrip():
    bits = [0, 1, 1, 0, 1, 0, 0, 1, 1, 1, 0, 0]
    data = _encode([(0, b) for b in bits]).to_bytes()
    assert _decode(data, [0] * len(bits)) == bits


def test_raw_mode_decode():
    dec = MqcDecoder.raw(bytes([0b10110011, 0b01010101]))
    assert [dec.raw_decode() for _ in range(16)] == [
        1, 0, 1, 1, 0, 0, 1, 1, 0, 1, 0, 1, 0, 1, 0, 1,
    ]


def test_long_sequence_roundtrip():
    bits = [(i * 7 + 3) % 2 for i in range(1000)]
    data = _encode([(0, b) for b in bits]).to_bytes()
    assert _decode(data, [0] * len(bits)) == bits


def test_multi_context_roundtrip():
    pairs = [
        (0, 1), (1, 0), (2, 1), (0, 0), (1, 1),
        (2, 0), (0, 1), (1, 1), (2, 0), (0, 0),
        (3, 1), (3, 1), (3, 0), (3, 0), (3, 1),
    ]
    data = _encode(pairs).to_bytes()
    assert _decode(data, [c for c, _ in pairs]) == [b for _, b in pairs]


def test_ff_byte_handling():
    data = _encode([(0, 1)] * 200).to_bytes()
    assert data[-1] != 0xFF
    assert _decode(data, [0] * 200) == [1] * 200


def test_segmark_roundtrip():
    enc = MqcEncoder()
    enc.encode(0, 1)
    enc.encode(0, 0)
    enc.segmark()
    enc.flush()
    assert _decode(enc.to_bytes(), [0, 0, 18, 18, 18, 18]) == [1, 0, 1, 0, 1, 0]


@pytest.mark.parametrize("bit", [0, 1])
def test_constant_roundtrip(bit):
    data = _encode([(0, bit)] * 500).to_bytes()
    assert _decode(data, [0] * 500) == [bit] * 500


def test_setstate_affects_coding():
    bits = [1, 0, 1, 0, 1, 1, 0, 0]
    pairs = [(0, b) for b in bits]
    bytes1 = _encode(pairs).to_bytes()

    def setup(coder):
        coder.setstate(0, 0, 20)

    bytes2 = _encode(pairs, setup).to_bytes()
    assert bytes1 != bytes2
    assert _decode(bytes2, [0] * len(bits), setup) == bits


def test_setstate_rejects_unknown_context():
    enc = MqcEncoder()
    with pytest.raises(IndexError):
        enc.setstate(19, 0, 0)


def test_empty_encoder_has_no_bytes():
    enc = MqcEncoder()
    assert enc.numbytes() == 0
    assert enc.to_bytes() == b""