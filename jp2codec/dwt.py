"""Discrete wavelet transforms: reversible 5/3 and irreversible 9/7.

One-dimensional transforms take a sequence and return a new list laid out as
``[low | high]`` (forward) or as the interleaved signal (inverse). The
two-dimensional transforms work on a flat row-major sequence and return a new
list of the same layout, transforming the LL band again at every level.
"""

_ALPHA = -1.586134342
_BETA = -0.052980118
_GAMMA = 0.882911075
_DELTA = 0.443506852
_K = 1.230174105
_INV_K = 1.0 / 1.230174105


def mirror(index, length):
    """Reflect ``index`` symmetrically into ``range(length)``."""
    if length == 1:
        return 0
    index = abs(index)
    period = 2 * (length - 1)
    index %= period
    if index >= length:
        index = period - index
    return index


def _sums_for_high(low, n_high):
    n_low = len(low)
    return [low[i] + low[mirror(i + 1, n_low)] for i in range(n_high)]


def _sums_for_low(high, n_low):
    n_high = max(len(high), 1)
    return [high[mirror(i - 1, n_high)] + high[mirror(i, n_high)] for i in range(n_low)]


def _interleave(low, high):
    out = [0] * (len(low) + len(high))
    out[0::2] = low
    out[1::2] = high
    return out


def _split(data):
    n_low = (len(data) + 1) // 2
    return list(data[:n_low]), list(data[n_low:])


def dwt53_forward_1d(data):
    """Forward 5/3 transform of one line; returns ``[low | high]``."""
    if len(data) <= 1:
        return list(data)
    low, high = list(data[0::2]), list(data[1::2])
    high = [h - (s >> 1) for h, s in zip(high, _sums_for_high(low, len(high)))]
    low = [v + ((s + 2) >> 2) for v, s in zip(low, _sums_for_low(high, len(low)))]
    return low + high


def dwt53_inverse_1d(data):
    """Inverse 5/3 transform of one ``[low | high]`` line."""
    if len(data) <= 1:
        return list(data)
    low, high = _split(data)
    low = [v - ((s + 2) >> 2) for v, s in zip(low, _sums_for_low(high, len(low)))]
    high = [h + (s >> 1) for h, s in zip(high, _sums_for_high(low, len(high)))]
    return _interleave(low, high)


def dwt97_forward_1d(data):
    """Forward 9/7 transform of one line; returns ``[low | high]``."""
    if len(data) <= 1:
        return [float(v) for v in data]
    low = [float(v) for v in data[0::2]]
    high = [float(v) for v in data[1::2]]
    high = [h + _ALPHA * s for h, s in zip(high, _sums_for_high(low, len(high)))]
    low = [v + _BETA * s for v, s in zip(low, _sums_for_low(high, len(low)))]
    high = [h + _GAMMA * s for h, s in zip(high, _sums_for_high(low, len(high)))]
    low = [v + _DELTA * s for v, s in zip(low, _sums_for_low(high, len(low)))]
    return [v * _INV_K for v in low] + [h * _K for h in high]


def dwt97_inverse_1d(data):
    """Inverse 9/7 transform of one ``[low | high]`` line."""
    if len(data) <= 1:
        return [float(v) for v in data]
    low, high = _split(data)
    low = [v * _K for v in low]
    high = [h * _INV_K for h in high]
    low = [v - _DELTA * s for v, s in zip(low, _sums_for_low(high, len(low)))]
    high = [h - _GAMMA * s for h, s in zip(high, _sums_for_high(low, len(high)))]
    low = [v - _BETA * s for v, s in zip(low, _sums_for_low(high, len(low)))]
    high = [h - _ALPHA * s for h, s in zip(high, _sums_for_high(low, len(high)))]
    return _interleave(low, high)


def _level_sizes(width, height, levels):
    w, h = width, height
    for _ in range(levels):
        if w <= 1 and h <= 1:
            break
        yield w, h
        w = (w + 1) // 2
        h = (h + 1) // 2


def _transform_rows(data, width, w, h, transform):
    for row in range(h):
        start = row * width
        data[start:start + w] = transform(data[start:start + w])


def _transform_columns(data, width, w, h, transform):
    for col in range(w):
        column = slice(col, col + h * width, width)
        data[column] = transform(data[column])


def _checked_copy(data, width, height):
    out = list(data)
    if len(out) < width * height:
        raise ValueError(
            f"data holds {len(out)} samples, need {width * height} for {width}x{height}"
        )
    return out


def _forward_2d(data, width, height, levels, transform):
    out = _checked_copy(data, width, height)
    for w, h in _level_sizes(width, height, levels):
        _transform_rows(out, width, w, h, transform)
        _transform_columns(out, width, w, h, transform)
    return out


def _inverse_2d(data, width, height, levels, transform):
    out = _checked_copy(data, width, height)
    for w, h in reversed(list(_level_sizes(width, height, levels))):
        _transform_columns(out, width, w, h, transform)
        _transform_rows(out, width, w, h, transform)
    return out


def dwt53_forward_2d(data, width, height, levels):
    """Multi-level forward 5/3 transform of a row-major image."""
    return _forward_2d(data, width, height, levels, dwt53_forward_1d)


def dwt53_inverse_2d(data, width, height, levels):
    """Multi-level inverse 5/3 transform of a row-major image."""
    return _inverse_2d(data, width, height, levels, dwt53_inverse_1d)


def dwt97_forward_2d(data, width, height, levels):
    """Multi-level forward 9/7 transform of a row-major image."""
    return _forward_2d(data, width, height, levels, dwt97_forward_1d)


def dwt97_inverse_2d(data, width, height, levels):
    """Multi-level inverse 9/7 transform of a row-major image."""
    return _inverse_2d(data, width, height, levels, dwt97_inverse_1d)