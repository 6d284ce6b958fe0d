# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #

"""Entry point for the Hard75 Tracker Discord bot."""

from __future__ import annotations

import asyncio
import logging
import sys

import discord

from app.bootstrap import load_main_configuration, resolve_timezone
from app.bot import build_runtime, build_services, create_bot, register_event_handlers
from services.config import get_config_service

logger = logging.getLogger("tracker.bot")


def _prepare_event_loop() -> asyncio.AbstractEventLoop:
    """Create a dedicated asyncio loop for the bot runtime."""

    if sys.platform == "win32":
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
    else:
        try:  # pragma: no cover - uvloop optional dependency
            import uvloop

            asyncio.set_event_loop_policy(uvloop.EventLoopPolicy())
            logger.info("Using uvloop for better performance")
        except ImportError:
            pass

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    return loop


def main() -> None:
    """Main entry point for the Discord bot."""

    # py-cord needs an event loop before the bot is created
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        _prepare_event_loop()

    config = load_main_configuration()
    runtime = build_runtime(config)
    resolve_timezone(config, logger=runtime.logger)

    bot = create_bot(runtime)
    services = build_services(bot, config)
    bot.tracker_services = services
    register_event_handlers(bot, runtime, services)

    token = get_config_service().get_bot_token()
    if not token:
        runtime.logger.error("FATAL: Bot token not found. Set DISCORD_TOKEN in the environment.")
        sys.exit(1)

    try:
        runtime.logger.info("Starting bot with token ending in: ...%s", token[-4:])
        bot.run(token)
    except discord.LoginFailure:
        runtime.logger.error("FATAL: Invalid Discord Bot Token provided.")
        sys.exit(1)
    except discord.PrivilegedIntentsRequired:
        runtime.logger.error(
            "FATAL: Necessary Privileged Intents are missing in the Discord Developer Portal!"
        )
        sys.exit(1)
    finally:
        _shutdown_reconciliation(services, runtime.logger)
    runtime.logger.info("Bot has stopped gracefully.")


def _shutdown_reconciliation(services, logger: logging.Logger) -> None:
    reconciliation = services.reconciliation
    if not reconciliation.running:
        return
    logger.info("Stopping Reconciliation Service...")
    reconciliation.running = False
    if reconciliation.task is not None:
        reconciliation.task.cancel()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt - shutting down gracefully")
