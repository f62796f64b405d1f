#
# Copyright (C) 2024 The lia-hdl developers
#
# This file is part of lia-hdl
#
# SPDX-License-Identifier: MIT
#

import cocotb
from cocotb.clock import Clock
from cocotb.triggers import ClockCycles, RisingEdge, Timer

import cmath
import math
import random

from lia_hdl.model import LockInModel
from lia_hdl.util import frequency_word


async def reset(dut):
    dut.rst_n.value = 0
    dut.sample.value = 0
    dut.sample_valid.value = 0
    dut.increment.value = 0
    dut.enable.value = 0
    cocotb.start_soon(Clock(dut.clk, 12, units='ns').start())
    await ClockCycles(dut.clk, 5)


def outputs(dut):
    return (dut.mixed_i.value.signed_integer,
            dut.mixed_q.value.signed_integer,
            bool(dut.out_valid.value))


@cocotb.test()
async def test_cycle_model(dut):
    await reset(dut)
    model = LockInModel()
    rising = RisingEdge(dut.clk)
    num_inputs = 2000
    inputs = (0, False, 0, False, True)

    await rising
    dut.rst_n.value = 1
    for j in range(num_inputs):
        await rising
        # registers still show the values from the previous edge
        assert outputs(dut) == model.outputs(), \
            f'out = {outputs(dut)}, expected = {model.outputs()} @ cycle = {j}'
        model.advance(*inputs)
        inputs = (random.randrange(-2**11, 2**11),
                  random.random() < 0.8,
                  0x0137_9bdf if j < num_inputs // 2 else 0x0a5a_5a5a,
                  random.random() < 0.9,
                  random.random() > 0.01)
        sample, sample_valid, increment, enable, rst_n = inputs
        dut.sample.value = sample
        dut.sample_valid.value = int(sample_valid)
        dut.increment.value = increment
        dut.enable.value = int(enable)
        dut.rst_n.value = int(rst_n)
    dut._log.info('%d cycles match the cycle-accurate model', num_inputs)


@cocotb.test()
async def test_async_reset(dut):
    await reset(dut)
    rising = RisingEdge(dut.clk)
    await rising
    dut.rst_n.value = 1
    dut.enable.value = 1
    dut.sample_valid.value = 1
    dut.sample.value = -1000
    dut.increment.value = 2**30
    await ClockCycles(dut.clk, 20)
    assert dut.out_valid.value
    # assert reset in the middle of the clock period
    await Timer(3, units='ns')
    dut.rst_n.value = 0
    await Timer(1, units='ns')
    assert outputs(dut) == (0, 0, False)
    await ClockCycles(dut.clk, 3)
    assert outputs(dut) == (0, 0, False)


@cocotb.test()
async def test_tone(dut):
    await reset(dut)
    rising = RisingEdge(dut.clk)
    amplitude = 1000
    phase = 0.7
    period = 64
    num_periods = 8
    delay = 5

    await rising
    dut.rst_n.value = 1
    dut.enable.value = 1
    dut.sample_valid.value = 1
    dut.increment.value = frequency_word(1, period)
    z = []
    for j in range(num_periods * period + delay):
        await rising
        dut.sample.value = round(
            amplitude * math.sin(2 * math.pi * j / period + phase))
        if j >= delay:
            mixed_i, mixed_q, valid = outputs(dut)
            assert valid, f'output not valid @ cycle = {j}'
            z.append(complex(mixed_i, mixed_q))
    z = sum(z) / len(z)
    magnitude = abs(z) / (amplitude * (2**11 - 1) / 2)
    dut._log.info('magnitude = %f, phase = %f', magnitude, cmath.phase(z))
    assert abs(magnitude - 1) < 1e-2
    assert abs(cmath.phase(z) - phase) < 1e-2
