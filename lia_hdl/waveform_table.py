#
# Copyright (C) 2024 The lia-hdl developers
#
# This file is part of lia-hdl
#
# SPDX-License-Identifier: MIT
#

from amaranth import *
from amaranth.lib.memory import Memory
import amaranth.cli

import numpy as np


def sine_table(width, addr_width):
    """Samples of one sine period quantized to ``width`` bits"""
    depth = 2**addr_width
    scale = 2**(width - 1) - 1
    phase = 2 * np.pi * np.arange(depth) / depth
    return [int(a) for a in np.round(np.sin(phase) * scale)]


class WaveformTable(Elaboratable):
    """Sine waveform lookup table

    A read-only table holding one full period of a sine wave, quantized
    to ``width`` bits with amplitude ``2**(width-1)-1``. The table has a
    single read port with one cycle of latency: the output register is
    loaded with the entry at ``addr`` on each clock edge, and it is
    cleared by the domain reset.

    Since the table holds a whole period, the entry ``depth // 4`` places
    ahead of a given address is the cosine at that phase.

    Parameters
    ----------
    width : int
        Width of the table samples.
    addr_width : int
        Width of the address. The table depth is ``2**addr_width``.

    Attributes
    ----------
    delay : int
        Delay (in samples) introduced by this module.
    depth : int
        Number of entries in the table.
    addr : Signal(addr_width), in
        Read address (phase index).
    data : Signal(signed(width)), out
        Table sample at the address presented in the previous cycle.
    """
    def __init__(self, width: int = 12, addr_width: int = 8):
        if width < 2:
            raise ValueError('width must be at least 2')
        if addr_width < 2:
            raise ValueError('addr_width must be at least 2')
        self.w = width
        self.addr_width = addr_width
        self.depth = 2**addr_width

        self.addr = Signal(self.addr_width)
        self.data = Signal(signed(self.w))

    @property
    def delay(self):
        return 1

    @property
    def quarter(self):
        return self.depth // 4

    def samples(self):
        return sine_table(self.w, self.addr_width)

    def model(self, addr):
        return np.array(self.samples(), 'int')[np.asarray(addr)]

    def elaborate(self, platform):
        m = Module()

        m.submodules.mem = mem = Memory(
            shape=signed(self.w), depth=self.depth, init=self.samples())
        # Asynchronous read port followed by a fabric register, so that
        # the output register is cleared by the domain reset.
        rdport = mem.read_port(domain='comb')
        m.d.comb += rdport.addr.eq(self.addr)
        m.d.sync += self.data.eq(rdport.data)

        return m


if __name__ == '__main__':
    table = WaveformTable()
    amaranth.cli.main(table, ports=[table.addr, table.data])
