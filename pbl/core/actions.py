#!/usr/bin/env python3
# pbl/core/actions.py

"""
Action Queue
Turns the parsed command line into the ordered list of backend actions
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


class Verb(str, Enum):
    """Actions a backend may implement, one script per verb."""

    INSTALL = "install"
    CONFIG = "config"
    DEFAULT = "default"
    ADD_OPTION = "add-option"
    DEL_OPTION = "del-option"
    GET_OPTION = "get-option"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Action:
    verb: Verb
    argument: Optional[str] = None

    def arguments(self) -> List[str]:
        return [] if self.argument is None else [self.argument]


@dataclass
class Intent:
    """
    What the caller asked for.

    `legacy` is set when the program runs as `update-bootloader`; in that
    mode only `reinit` and `passthrough` are looked at.
    """

    install: bool = False
    config: bool = False
    show: bool = False
    default: Optional[str] = None
    add_option: Optional[str] = None
    del_option: Optional[str] = None
    get_option: Optional[str] = None
    legacy: bool = False
    reinit: bool = False
    passthrough: Tuple[str, ...] = field(default_factory=tuple)


def build_queue(intent: Intent) -> Tuple[Action, ...]:
    """
    Build the action queue for `intent`.

    `show` never produces an action. The returned tuple is final: actions
    run in exactly this order.
    """
    queue: List[Action] = []

    if intent.legacy:
        queue.append(Action(Verb.CONFIG))
        if intent.reinit:
            queue.insert(0, Action(Verb.INSTALL))
        return tuple(queue)

    if intent.install:
        queue.append(Action(Verb.INSTALL))
    if intent.config:
        queue.append(Action(Verb.CONFIG))
    if intent.default is not None:
        queue.append(Action(Verb.DEFAULT, intent.default))
    if intent.add_option is not None:
        queue.append(Action(Verb.ADD_OPTION, intent.add_option))
    if intent.del_option is not None:
        queue.append(Action(Verb.DEL_OPTION, intent.del_option))
    if intent.get_option is not None:
        queue.append(Action(Verb.GET_OPTION, intent.get_option))

    return tuple(queue)
