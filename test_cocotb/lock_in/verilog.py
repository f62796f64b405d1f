#!/usr/bin/env python3
#
# Copyright (C) 2024 The lia-hdl developers
#
# This file is part of lia-hdl
#
# SPDX-License-Identifier: MIT
#

from amaranth.back.verilog import convert

from lia_hdl.lock_in import LockIn


def main():
    top = LockIn()
    with open('dut.v', 'w') as f:
        f.write('`timescale 1ps/1ps\n')
        f.write(convert(
            top, name='dut', ports=top.ports(), emit_src=False))


if __name__ == '__main__':
    main()
