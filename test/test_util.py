#
# Copyright (C) 2024 The lia-hdl developers
#
# This file is part of lia-hdl
#
# SPDX-License-Identifier: MIT
#

import numpy as np

import unittest

from lia_hdl.util import clamp_nbits, frequency_word


class TestUtil(unittest.TestCase):
    def test_clamp_nbits(self):
        self.assertEqual(clamp_nbits(2**23 - 1, 24), 2**23 - 1)
        self.assertEqual(clamp_nbits(2**23, 24), -2**23)
        self.assertEqual(clamp_nbits(-2**23 - 1, 24), 2**23 - 1)
        np.testing.assert_array_equal(
            clamp_nbits(np.array([127, 128, -129]), 8), [127, -128, 127])

    def test_frequency_word(self):
        self.assertEqual(frequency_word(1e3, 64e3), 2**26)
        self.assertEqual(frequency_word(0, 1e6), 0)
        self.assertEqual(frequency_word(0.5, 1), 2**31)
        # negative frequencies wrap
        self.assertEqual(frequency_word(-1, 4), 3 * 2**30)
        self.assertEqual(frequency_word(1, 1), 0)
        self.assertEqual(frequency_word(1, 2**10, width=28), 2**18)


if __name__ == '__main__':
    unittest.main()
