#
# Copyright (C) 2024 The lia-hdl developers
#
# This file is part of lia-hdl
#
# SPDX-License-Identifier: MIT
#

def clamp_nbits(x, nbits):
    offset = 2**(nbits - 1)
    return ((x + offset) % 2**nbits) - offset


def frequency_word(f_ref, f_s, width=32):
    """NCO increment for a reference frequency

    Returns ``round(f_ref / f_s * 2**width)`` wrapped to ``width`` bits,
    so negative frequencies map to their two's complement increment.
    """
    return round(f_ref / f_s * 2**width) % 2**width
