#
# Copyright (C) 2024 The lia-hdl developers
#
# This file is part of lia-hdl
#
# SPDX-License-Identifier: MIT
#

from .config import LockInConfig


def default():
    """Default lock-in configuration (12-bit ADC, 256-entry tables)"""
    return LockInConfig()


def wide():
    """Configuration for a 16-bit ADC with 1024-entry 16-bit tables"""
    config = LockInConfig()
    config.sample_width = 16
    config.reference_width = 16
    config.phase_bits = 10
    return config
