#
# Copyright (C) 2024 The lia-hdl developers
#
# This file is part of lia-hdl
#
# SPDX-License-Identifier: MIT
#

"""Cycle-accurate Python model of the lock-in core

Each class holds the register state of the corresponding gateware module
and updates it with ``advance()``, which is called once per clock cycle
with the inputs present before the clock edge. Reset has the highest
precedence: when it is asserted the state is cleared and the other
inputs are ignored.
"""

import logging

from .config import LockInConfig
from .waveform_table import sine_table

logger = logging.getLogger(__name__)


class NCOModel:
    def __init__(self, width=12, nco_width=32, phase_bits=8):
        self.nco_width = nco_width
        self.phase_bits = phase_bits
        self.table = sine_table(width, phase_bits)
        self.reset()

    def reset(self):
        self.phase = 0
        self.sin_out = 0
        self.cos_out = 0
        self.valid = False

    @property
    def addr(self):
        return self.phase >> (self.nco_width - self.phase_bits)

    def advance(self, increment, enable, rst=False):
        if rst:
            self.reset()
            return
        depth = len(self.table)
        addr = self.addr
        self.sin_out = self.table[addr]
        self.cos_out = self.table[(addr + depth // 4) % depth]
        self.valid = bool(enable)
        if enable:
            self.phase = (self.phase + increment) % 2**self.nco_width


class MixerModel:
    def __init__(self):
        self.reset()

    def reset(self):
        # stage 1, stage 2, stage 2b, output
        self.sample_q = 0
        self.reference_q = 0
        self.valid_q = False
        self.product = 0
        self.product_valid = False
        self.product_q = 0
        self.product_valid_q = False
        self.mixed_out = 0
        self.out_valid = False

    def advance(self, sample, sample_valid, reference, reference_valid,
                rst=False):
        if rst:
            self.reset()
            return
        # later stages first, so that each one sees the previous state
        self.mixed_out = self.product_q
        self.out_valid = self.product_valid_q
        self.product_q = self.product
        self.product_valid_q = self.product_valid
        self.product = self.sample_q * self.reference_q
        self.product_valid = self.valid_q
        self.sample_q = sample
        self.reference_q = reference
        self.valid_q = bool(sample_valid and reference_valid)


class LockInModel:
    def __init__(self, config=LockInConfig()):
        config.validate()
        self.config = config
        self.nco = NCOModel(
            config.reference_width, config.nco_width, config.phase_bits)
        self.mixer_i = MixerModel()
        self.mixer_q = MixerModel()
        self.cycle = 0

    def reset(self):
        self.nco.reset()
        self.mixer_i.reset()
        self.mixer_q.reset()

    def outputs(self):
        return (self.mixer_i.mixed_out, self.mixer_q.mixed_out,
                self.mixer_i.out_valid)

    def advance(self, sample, sample_valid, increment, enable, rst_n=True):
        rst = not rst_n
        # the mixers take the NCO outputs from before this clock edge
        self.mixer_i.advance(sample, sample_valid, self.nco.sin_out,
                             self.nco.valid, rst)
        self.mixer_q.advance(sample, sample_valid, self.nco.cos_out,
                             self.nco.valid, rst)
        self.nco.advance(increment, enable, rst)
        self.cycle += 1
        logger.debug('cycle=%d rst=%d phase=%#010x sin=%d cos=%d '
                     'nco_valid=%d mixed_i=%d mixed_q=%d out_valid=%d',
                     self.cycle, rst, self.nco.phase, self.nco.sin_out,
                     self.nco.cos_out, self.nco.valid,
                     *self.outputs())
        return self.outputs()
