"""Multi-component colour transforms.

The reversible transform (RCT) works on integers and is lossless; the
irreversible transform (ICT) works on floats. Each function takes three
equally long sample sequences and returns three new lists; if the lengths
differ, only the common prefix is transformed.
"""


def rct_forward(c0, c1, c2):
    """RGB to Y, Cb, Cr with the reversible transform."""
    y, cb, cr = [], [], []
    for r, g, b in zip(c0, c1, c2):
        y.append((r + 2 * g + b) >> 2)
        cb.append(b - g)
        cr.append(r - g)
    return y, cb, cr


def rct_inverse(c0, c1, c2):
    """Y, Cb, Cr back to RGB with the reversible transform."""
    red, green, blue = [], [], []
    for y, cb, cr in zip(c0, c1, c2):
        g = y - ((cb + cr) >> 2)
        red.append(cr + g)
        green.append(g)
        blue.append(cb + g)
    return red, green, blue


def ict_forward(c0, c1, c2):
    """RGB to Y, Cb, Cr with the irreversible transform."""
    y, cb, cr = [], [], []
    for r, g, b in zip(c0, c1, c2):
        y.append(0.299 * r + 0.587 * g + 0.114 * b)
        cb.append(-0.16875 * r - 0.33126 * g + 0.5 * b)
        cr.append(0.5 * r - 0.41869 * g - 0.08131 * b)
    return y, cb, cr


def ict_inverse(c0, c1, c2):
    """Y, Cb, Cr back to RGB with the irreversible transform."""
    red, green, blue = [], [], []
    for y, cb, cr in zip(c0, c1, c2):
        red.append(y + 1.402 * cr)
        green.append(y - 0.34413 * cb - 0.71414 * cr)
        blue.append(y + 1.772 * cb)
    return red, green, blue