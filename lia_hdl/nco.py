#
# Copyright (C) 2024 The lia-hdl developers
#
# This file is part of lia-hdl
#
# SPDX-License-Identifier: MIT
#

from amaranth import *
import amaranth.cli

import numpy as np

from .waveform_table import WaveformTable


class NCO(Elaboratable):
    """Quadrature numerically controlled oscillator

    This module implements an NCO with a phase accumulator and two
    ``WaveformTable`` lookup tables holding a sine period. The MSBs of the
    phase accumulator address the sine table directly. The cosine table is
    addressed with the same MSBs plus a quarter of the table depth, so the
    two references are always exactly 90 degrees apart and are produced
    on the same clock cycle.

    The reference outputs lag the phase accumulator by the one cycle read
    latency of the tables. The ``valid`` output mirrors ``enable`` delayed
    by one cycle to account for this.

    Parameters
    ----------
    width : int
        Width of the sine and cosine outputs.
    nco_width : int
        Width of the phase accumulator.
    phase_bits : int
        Number of MSBs of the phase accumulator used to address the
        lookup tables.

    Attributes
    ----------
    delay : int
        Delay (in samples) introduced by this module.
    enable : Signal(), in
        Enables the phase accumulator.
    increment : Signal(nco_width), in
        Frequency control word. The frequency in cycles per sample is
        ``increment / 2**nco_width``.
    phase : Signal(nco_width), out
        Phase accumulator.
    sin_out : Signal(signed(width)), out
        In-phase reference.
    cos_out : Signal(signed(width)), out
        Quadrature reference.
    valid : Signal(), out
        Indicates that ``sin_out`` and ``cos_out`` are valid.
    """
    def __init__(self, width: int = 12, *, nco_width: int = 32,
                 phase_bits: int = 8):
        if phase_bits > nco_width:
            raise ValueError('phase_bits cannot be larger than nco_width')
        self.w = width
        self.nco_width = nco_width
        self.phase_bits = phase_bits

        self.enable = Signal()
        self.increment = Signal(self.nco_width)
        self.phase = Signal(self.nco_width)
        self.sin_out = Signal(signed(self.w))
        self.cos_out = Signal(signed(self.w))
        self.valid = Signal()

        self.sin_table = WaveformTable(self.w, self.phase_bits)
        self.cos_table = WaveformTable(self.w, self.phase_bits)

    @property
    def delay(self):
        return self.sin_table.delay

    def model(self, increment, num_samples):
        phase = (np.arange(num_samples, dtype='int64') * increment
                 % 2**self.nco_width)
        addr = phase // 2**(self.nco_width - self.phase_bits)
        quarter = self.sin_table.quarter
        sin = self.sin_table.model(addr)
        cos = self.cos_table.model((addr + quarter) % self.sin_table.depth)
        return sin, cos

    def elaborate(self, platform):
        m = Module()

        m.submodules.sin_table = sin_table = self.sin_table
        m.submodules.cos_table = cos_table = self.cos_table

        with m.If(self.enable):
            m.d.sync += self.phase.eq(self.phase + self.increment)
        m.d.sync += self.valid.eq(self.enable)

        addr = self.phase[-self.phase_bits:]
        m.d.comb += [
            sin_table.addr.eq(addr),
            # wraps modulo the table depth
            cos_table.addr.eq(addr + cos_table.quarter),
            self.sin_out.eq(sin_table.data),
            self.cos_out.eq(cos_table.data),
        ]
        return m


if __name__ == '__main__':
    nco = NCO()
    amaranth.cli.main(nco, ports=[
        nco.enable, nco.increment,
        nco.sin_out, nco.cos_out, nco.valid,
    ])
