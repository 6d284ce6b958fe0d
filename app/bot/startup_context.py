# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Context object and decorator shared by the tracker startup steps."""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Awaitable, Callable, Optional, Protocol

import discord

from .runtime import BotRuntime
from .services import TrackerServices


@dataclass
class StartupContext:
    """Bot, runtime and tracker services handed to every startup step."""

    bot: discord.Bot
    runtime: BotRuntime
    services: TrackerServices

    @property
    def logger(self):
        return self.runtime.logger

    @property
    def config(self):
        return self.runtime.config


class StartupStep(Protocol):
    step_name: str
    critical: bool

    async def __call__(self, context: StartupContext) -> None:
        ...


StepCallable = Callable[[StartupContext], Awaitable[None]]


def as_step(func: Optional[StepCallable] = None, *, critical: bool = True):
    """Mark a coroutine as a startup step.

    A non-critical step that raises a tracker error is logged and skipped;
    a critical one aborts the sequence.  Usable bare (``@as_step``) or as
    ``@as_step(critical=False)``.
    """

    def decorate(step_func: StepCallable) -> StartupStep:
        step_name = getattr(step_func, "__name__", step_func.__class__.__name__)

        @wraps(step_func)
        async def _runner(context: StartupContext) -> None:
            await step_func(context)

        _runner.step_name = step_name
        _runner.critical = critical
        return _runner

    if func is not None:
        return decorate(func)
    return decorate
