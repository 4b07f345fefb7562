#!/usr/bin/env python3
"""
pbl Utilities Module
Contains helpers for assembling backend command lines
"""

from .command_builder import build_backend_command, build_legacy_command, format_command

__all__ = ['build_backend_command', 'build_legacy_command', 'format_command']
