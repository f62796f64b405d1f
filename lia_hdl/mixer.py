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


class MixerPipeline(Elaboratable):
    """Real mixer pipeline

    This module multiplies an input sample by a reference sample using a
    pipeline of four register tiers:

    1. Capture of the sample, the reference and the AND of their
       valid strobes.
    2. Full precision signed product.
    3. Buffer register.
    4. Output register.

    The output is valid three clock cycles after the inputs are captured.
    The output width is the sum of the operand widths, so the product
    cannot overflow. No rounding or saturation is done.

    Parameters
    ----------
    sample_width : int
        Width of the input sample.
    reference_width : int
        Width of the reference sample.

    Attributes
    ----------
    delay : int
        Delay (in samples) introduced by this module.
    out_width : int
        Width of the output (``sample_width + reference_width``).
    sample : Signal(signed(sample_width)), in
        Input sample.
    sample_valid : Signal(), in
        Input sample valid.
    reference : Signal(signed(reference_width)), in
        Reference sample.
    reference_valid : Signal(), in
        Reference sample valid.
    mixed_out : Signal(signed(out_width)), out
        Product of the sample and the reference.
    out_valid : Signal(), out
        Output valid.
    sample_q : Signal(signed(sample_width)), out
        Sample captured by the first pipeline stage.
    reference_q : Signal(signed(reference_width)), out
        Reference captured by the first pipeline stage.
    valid_q : Signal(), out
        Valid strobe of the first pipeline stage.
    """
    def __init__(self, sample_width: int = 12, reference_width: int = 12):
        if sample_width < 1 or reference_width < 1:
            raise ValueError('operand widths must be positive')
        self.sw = sample_width
        self.rw = reference_width
        self.out_width = self.sw + self.rw

        self.sample = Signal(signed(self.sw))
        self.sample_valid = Signal()
        self.reference = Signal(signed(self.rw))
        self.reference_valid = Signal()
        self.mixed_out = Signal(signed(self.out_width))
        self.out_valid = Signal()

        self.sample_q = Signal(signed(self.sw))
        self.reference_q = Signal(signed(self.rw))
        self.valid_q = Signal()

    @property
    def delay(self):
        return 4

    def model(self, sample, reference):
        sample, reference = [np.array(a, 'int') for a in [sample, reference]]
        return sample * reference

    def elaborate(self, platform):
        m = Module()

        product = Signal(signed(self.out_width))
        product_valid = Signal()
        product_q = Signal(signed(self.out_width))
        product_valid_q = Signal()

        m.d.sync += [
            # capture
            self.sample_q.eq(self.sample),
            self.reference_q.eq(self.reference),
            self.valid_q.eq(self.sample_valid & self.reference_valid),
            # multiply
            product.eq(self.sample_q * self.reference_q),
            product_valid.eq(self.valid_q),
            # buffer
            product_q.eq(product),
            product_valid_q.eq(product_valid),
            # output
            self.mixed_out.eq(product_q),
            self.out_valid.eq(product_valid_q),
        ]
        return m


if __name__ == '__main__':
    mixer = MixerPipeline()
    amaranth.cli.main(mixer, ports=[
        mixer.sample, mixer.sample_valid,
        mixer.reference, mixer.reference_valid,
        mixer.mixed_out, mixer.out_valid,
    ])
