#
# Copyright (C) 2024 The lia-hdl developers
#
# This file is part of lia-hdl
#
# SPDX-License-Identifier: MIT
#

class LockInConfig:
    """Lock-in core configuration

    This class defines the elaboration parameters of the lock-in core.
    The mixer output width is not a parameter: it is always the sum of
    ``sample_width`` and ``reference_width``.
    """
    def __init__(self):
        # create default configuration

        # input
        self.sample_width = 12

        # NCO
        self.reference_width = 12
        self.nco_width = 32
        self.phase_bits = 8

    @property
    def out_width(self):
        return self.sample_width + self.reference_width

    def validate(self):
        assert self.sample_width > 0
        assert self.reference_width > 1
        assert self.phase_bits > 1
        assert self.phase_bits <= self.nco_width
