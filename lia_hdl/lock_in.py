#
# Copyright (C) 2024 The lia-hdl developers
#
# This file is part of lia-hdl
#
# SPDX-License-Identifier: MIT
#

import argparse
import logging

from amaranth import *
import amaranth.back.verilog

from .config import LockInConfig
from . import configs
from .mixer import MixerPipeline
from .nco import NCO

logger = logging.getLogger(__name__)


class LockIn(Elaboratable):
    """Lock-in amplifier core

    This elaboratable demodulates the input samples against a quadrature
    reference generated by an ``NCO``. The sine reference drives the I
    ``MixerPipeline`` and the cosine reference drives the Q
    ``MixerPipeline``. Both mixers receive the same input sample and the
    same validity strobes, so they always work in lockstep.

    The core owns the ``sync`` clock domain, which has an active-low
    asynchronous reset driven by ``rst_n``.

    Parameters
    ----------
    config : LockInConfig
        Elaboration parameters.

    Attributes
    ----------
    delay : int
        Delay (in samples) from ``sample`` to ``mixed_i`` and ``mixed_q``.
    fill_cycles : int
        Number of clock cycles from reset release until ``out_valid``
        is first asserted, when ``enable`` and ``sample_valid`` are held
        high.
    rst_n : Signal(), in
        Active-low asynchronous reset.
    sample : Signal(signed(sample_width)), in
        Input sample.
    sample_valid : Signal(), in
        Input sample valid.
    increment : Signal(nco_width), in
        NCO frequency control word. The reference frequency in cycles
        per sample is ``increment / 2**nco_width``.
    enable : Signal(), in
        NCO enable.
    mixed_i : Signal(signed(sample_width + reference_width)), out
        In-phase mixer output.
    mixed_q : Signal(signed(sample_width + reference_width)), out
        Quadrature mixer output.
    out_valid : Signal(), out
        Indicates that ``mixed_i`` and ``mixed_q`` are valid.
    """
    def __init__(self, config=LockInConfig()):
        config.validate()
        self.config = config
        self.sync = ClockDomain('sync', async_reset=True)

        self.rst_n = Signal()
        self.sample = Signal(signed(config.sample_width))
        self.sample_valid = Signal()
        self.increment = Signal(config.nco_width)
        self.enable = Signal()
        self.mixed_i = Signal(signed(config.out_width))
        self.mixed_q = Signal(signed(config.out_width))
        self.out_valid = Signal()

        self.nco = NCO(
            config.reference_width, nco_width=config.nco_width,
            phase_bits=config.phase_bits)
        self.mixer_i = MixerPipeline(
            config.sample_width, config.reference_width)
        self.mixer_q = MixerPipeline(
            config.sample_width, config.reference_width)

    @property
    def delay(self):
        return self.mixer_i.delay

    @property
    def fill_cycles(self):
        return self.nco.delay + self.mixer_i.delay

    def model(self, increment, samples):
        """Reference model of the core

        ``samples[n]`` is mixed with the n-th reference sample produced by
        the NCO after reset, assuming that ``enable`` and ``sample_valid``
        are held high.
        """
        sin, cos = self.nco.model(increment, len(samples))
        return (self.mixer_i.model(samples, sin),
                self.mixer_q.model(samples, cos))

    def ports(self):
        return [
            self.sync.clk,
            self.rst_n,
            self.sample,
            self.sample_valid,
            self.increment,
            self.enable,
            self.mixed_i,
            self.mixed_q,
            self.out_valid,
        ]

    def elaborate(self, platform):
        m = Module()
        m.domains += [self.sync]
        m.d.comb += self.sync.rst.eq(~self.rst_n)

        m.submodules.nco = nco = self.nco
        m.submodules.mixer_i = mixer_i = self.mixer_i
        m.submodules.mixer_q = mixer_q = self.mixer_q

        m.d.comb += [
            nco.enable.eq(self.enable),
            nco.increment.eq(self.increment),
        ]
        for mixer, reference in [(mixer_i, nco.sin_out),
                                 (mixer_q, nco.cos_out)]:
            m.d.comb += [
                mixer.sample.eq(self.sample),
                mixer.sample_valid.eq(self.sample_valid),
                mixer.reference.eq(reference),
                mixer.reference_valid.eq(nco.valid),
            ]

        m.d.comb += [
            self.mixed_i.eq(mixer_i.mixed_out),
            self.mixed_q.eq(mixer_q.mixed_out),
            self.out_valid.eq(mixer_i.out_valid),
        ]
        return m


def parse_args():
    parser = argparse.ArgumentParser(
        description='Generate Verilog for the lock-in amplifier core')
    parser.add_argument(
        '--config', default='default',
        help='lock-in configuration name [default=%(default)r]')
    parser.add_argument(
        'output_file', help='Output verilog file')
    return parser.parse_args()


def main():
    logging.basicConfig(level=logging.INFO)
    args = parse_args()
    config = getattr(configs, args.config)()
    top = LockIn(config)
    logger.info('sample width %d, reference width %d, output width %d, '
                '%d-entry tables',
                config.sample_width, config.reference_width,
                config.out_width, 2**config.phase_bits)
    with open(args.output_file, 'w') as f:
        f.write(amaranth.back.verilog.convert(
            top, name='lia_core', ports=top.ports()))
    logger.info('wrote %s', args.output_file)


if __name__ == '__main__':
    main()
