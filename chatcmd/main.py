"""Command-line interface: run the Slack bot, inspect config, or try a message offline."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import signal
from pathlib import Path
from typing import List, Optional, Sequence

from .chat_adapters.console_adapter import ConsoleAdapter
from .chat_adapters.slack_adapter import SlackAdapter
from .core import (
    Config,
    ConfigError,
    FrameworkOptions,
    IncomingMessage,
    PrefixOptions,
    Router,
    SlackError,
    load_config,
)
from .core.commands import Command, help_command
from .core.config import BOT_FILE, load_prefix_options, resolve_config_dir

LOGGER = logging.getLogger(__name__)

CONSOLE_ID = "console"


def cli(argv: Sequence[str] | None = None) -> int:
    """Parse ``argv`` and run the selected subcommand; returns the exit code."""
    parser = argparse.ArgumentParser(
        prog="chatcmd",
        description="chatcmd - prefix command bot for Slack",
    )
    parser.add_argument(
        "--config-dir",
        default=None,
        help="Directory holding .env and bot.yaml (default: ~/.chatcmd)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Without a subcommand the Slack bot is started")

    subparsers.add_parser("check-config", help="Print the resolved configuration and exit")

    try_parser = subparsers.add_parser("try", help="Dispatch one message offline and print the outcome")
    try_parser.add_argument("text", help="Message text, e.g. '!help'")
    try_parser.add_argument(
        "--bot-user-id",
        default="UBOT",
        help="User ID treated as the bot for mention prefixes (default: UBOT)",
    )

    args = parser.parse_args(argv)
    _configure_logging()

    if args.command == "check-config":
        return run_check_config(args.config_dir)
    if args.command == "try":
        return run_try(args.text, args.config_dir, args.bot_user_id)
    return run_bot(args.config_dir)


def run() -> None:
    """Console script entry point."""
    raise SystemExit(cli())


def build_commands() -> List[Command]:
    """Commands every bot started from the CLI is registered with."""
    return [help_command()]


def run_check_config(config_dir: str | Path | None) -> int:
    try:
        config = load_config(config_dir)
    except ConfigError as exc:
        LOGGER.error("Configuration error: %s", exc)
        return 1

    options = config.prefix_options
    print(f"Config directory: {config.config_dir}")
    print(f"Prefix: {options.prefix!r}")
    print(f"Additional prefixes: {len(options.additional_prefixes)}")
    print(f"Mention as prefix: {options.mention_as_prefix}")
    print(f"Case-insensitive commands: {options.case_insensitive_commands}")
    print(f"Allowed users: {', '.join(config.slack_allowed_user_ids)}")
    return 0


def run_try(text: str, config_dir: str | Path | None, bot_user_id: str) -> int:
    """Dispatch ``text`` against the built-in commands, printing replies and the status."""
    prefix_options = PrefixOptions(prefix="!")
    if config_dir:
        try:
            prefix_options = load_prefix_options(resolve_config_dir(config_dir) / BOT_FILE)
        except ConfigError as exc:
            LOGGER.error("Configuration error: %s", exc)
            return 1

    router = Router(
        FrameworkOptions(commands=build_commands(), prefix_options=prefix_options),
        bot_user_id=bot_user_id,
    )
    router.bind_adapter(ConsoleAdapter())
    message = IncomingMessage(content=text, author_id=CONSOLE_ID, channel_id=CONSOLE_ID)
    result = asyncio.run(router.dispatch(message))
    print(f"[{result.status.value}]")
    return 0 if result.error is None else 1


def run_bot(config_dir: str | Path | None) -> int:
    try:
        config = load_config(config_dir)
    except ConfigError as exc:
        LOGGER.error("Configuration error: %s", exc)
        return 1
    LOGGER.info("Using config directory: %s", config.config_dir)

    try:
        asyncio.run(serve(config))
    except SlackError as exc:
        LOGGER.error("Slack error: %s", exc)
        return 1
    except KeyboardInterrupt:
        LOGGER.info("Interrupted by user")
        return 130
    return 0


async def serve(config: Config, commands: Optional[Sequence[Command]] = None) -> None:
    """Run the Slack bot until SIGINT/SIGTERM or until the connection task ends."""
    commands = list(commands) if commands is not None else build_commands()
    router = Router(FrameworkOptions(commands=commands, prefix_options=config.prefix_options))
    adapter = SlackAdapter(
        bot_token=config.slack_bot_token,
        app_token=config.slack_app_token,
        allowed_user_ids=config.slack_allowed_user_ids,
        router=router,
    )
    router.bind_adapter(adapter)
    LOGGER.info("Registered %s command(s)", len(commands))

    shutdown = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown.set)
        except NotImplementedError:
            # No signal handlers on Windows event loops.
            pass

    adapter_task = asyncio.create_task(adapter.start())
    shutdown_task = asyncio.create_task(shutdown.wait())
    await asyncio.wait({adapter_task, shutdown_task}, return_when=asyncio.FIRST_COMPLETED)

    if shutdown.is_set():
        LOGGER.info("Shutdown requested")
    shutdown_task.cancel()
    await adapter.stop()
    # Re-raises a crash of the connection task.
    await adapter_task
    LOGGER.info("chatcmd stopped")


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.getLogger().setLevel(getattr(logging, level_name, logging.INFO))


if __name__ == "__main__":
    raise SystemExit(cli())
