#!/usr/bin/env python3
"""
pbl - Bootloader Configuration Dispatcher
Translates bootloader requests into calls of backend scripts
"""

__version__ = "1.0.0"

__all__ = ['__version__']
