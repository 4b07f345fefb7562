#!/usr/bin/env python3
"""
pbl Core Module
Contains the dispatcher and its building blocks
"""

from .actions import Action, Intent, Verb, build_queue
from .backend import BackendResolver, Found, Missing
from .config import ConfigError, PblConfig
from .dispatcher import PblDispatcher
from .executor import CommandExecutor, ExecutionResult
from .settings import Settings

__all__ = [
    'Action', 'Intent', 'Verb', 'build_queue',
    'BackendResolver', 'Found', 'Missing',
    'ConfigError', 'PblConfig', 'PblDispatcher',
    'CommandExecutor', 'ExecutionResult',
    'Settings',
]
