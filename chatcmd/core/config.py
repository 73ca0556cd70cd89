"""Configuration: prefix strategies, framework options and the on-disk loader."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Awaitable, Callable, List, Optional, Sequence, Tuple

import yaml
from dotenv import load_dotenv

from .errors import ConfigError
from .models import IncomingMessage, LiteralPrefix, PartialContext, PatternPrefix, Prefix

if TYPE_CHECKING:
    from .commands.context import PrefixContext
    from .commands.registry import Command, SlashCommand
    from .errors import ChatCmdError

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path("~/.chatcmd").expanduser()
ENV_FILE_NAME = ".env"
BOT_FILE = "bot.yaml"

DynamicPrefixFn = Callable[[PartialContext], Awaitable[Optional[str]]]
StrippedDynamicPrefixFn = Callable[[IncomingMessage, Any], Awaitable[Optional[Tuple[str, str]]]]
HookFn = Callable[["PrefixContext"], Awaitable[None]]
ErrorHandlerFn = Callable[["ChatCmdError", "PrefixContext"], Awaitable[None]]


@dataclass
class PrefixOptions:
    prefix: Optional[str] = None
    dynamic_prefix: Optional[DynamicPrefixFn] = None
    additional_prefixes: List[Prefix] = field(default_factory=list)
    stripped_dynamic_prefix: Optional[StrippedDynamicPrefixFn] = None
    mention_as_prefix: bool = True
    case_insensitive_commands: bool = False
    execute_self_messages: bool = False
    execute_untracked_edits: bool = True


@dataclass
class FrameworkOptions:
    commands: Sequence[Command] = ()
    slash_commands: Sequence[SlashCommand] = ()
    prefix_options: PrefixOptions = field(default_factory=PrefixOptions)
    on_error: Optional[ErrorHandlerFn] = None
    pre_command: Optional[HookFn] = None
    post_command: Optional[HookFn] = None


@dataclass
class Config:
    prefix_options: PrefixOptions
    slack_bot_token: str
    slack_app_token: str
    slack_allowed_user_ids: list[str]
    config_dir: Optional[Path] = None


def resolve_config_dir(config_dir: Path | str | None) -> Path:
    """Return the absolute config directory, defaulting to ~/.chatcmd."""
    root = Path(config_dir).expanduser().resolve() if config_dir else DEFAULT_CONFIG_DIR.resolve()
    if not root.is_dir():
        problem = "is not a directory" if root.exists() else "does not exist"
        raise ConfigError(f"Config directory {root} {problem}; it must contain bot.yaml and optionally .env")
    return root


def load_config(config_dir: Path | str | None = None) -> Config:
    """Load bot configuration from the provided or default directory."""
    root = resolve_config_dir(config_dir)
    _load_env_file(root / ENV_FILE_NAME)

    prefix_options = load_prefix_options(root / BOT_FILE)

    return Config(
        prefix_options=prefix_options,
        slack_bot_token=_require_env("SLACK_BOT_TOKEN"),
        slack_app_token=_require_env("SLACK_APP_TOKEN"),
        slack_allowed_user_ids=_load_allowed_user_ids(),
        config_dir=root,
    )


def load_prefix_options(path: Path) -> PrefixOptions:
    """Read prefix settings from bot.yaml. Callbacks can only be set in code."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"bot.yaml not found at {path}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid bot.yaml structure at {path}")

    prefix = data.get("prefix")
    if prefix is not None and (not isinstance(prefix, str) or not prefix):
        raise ConfigError("prefix must be a non-empty string")

    raw_additional = data.get("additional_prefixes") or []
    if not isinstance(raw_additional, list):
        raise ConfigError("additional_prefixes must be a list")
    additional = [_parse_prefix_entry(entry) for entry in raw_additional]

    options = PrefixOptions(
        prefix=prefix,
        additional_prefixes=additional,
        mention_as_prefix=_read_bool(data, "mention_as_prefix", True),
        case_insensitive_commands=_read_bool(data, "case_insensitive_commands", False),
        execute_self_messages=_read_bool(data, "execute_self_messages", False),
        execute_untracked_edits=_read_bool(data, "execute_untracked_edits", True),
    )
    if options.prefix is None and not options.additional_prefixes and not options.mention_as_prefix:
        LOGGER.warning("No prefix configured in %s; no message will ever be a command", path)
    return options


def _parse_prefix_entry(entry: Any) -> Prefix:
    if isinstance(entry, str) and entry:
        return LiteralPrefix(entry)
    if isinstance(entry, dict) and "regex" in entry:
        try:
            return PatternPrefix.compile(str(entry["regex"]))
        except re.error as exc:
            raise ConfigError(f"Invalid prefix regex {entry['regex']!r}: {exc}") from exc
    raise ConfigError(f"Unsupported additional prefix entry: {entry!r}")


def _read_bool(data: dict, key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false")
    return value


def _load_env_file(path: Path) -> None:
    if path.is_file():
        # Variables already exported in the shell take precedence.
        load_dotenv(dotenv_path=path, override=False)
    else:
        LOGGER.warning("%s not found; Slack credentials must come from the environment", path)


def _require_env(name: str) -> str:
    value = (os.getenv(name) or "").strip()
    if not value:
        raise ConfigError(f"Environment variable {name} is required")
    return value


def _load_allowed_user_ids() -> list[str]:
    """Comma- or whitespace-separated Slack user IDs allowed to run commands."""
    raw = os.getenv("SLACK_ALLOWED_USER_IDS") or os.getenv("SLACK_ALLOWED_USER_ID") or ""
    user_ids = [uid for uid in re.split(r"[,\s]+", raw) if uid]
    if not user_ids:
        raise ConfigError("SLACK_ALLOWED_USER_IDS must list at least one Slack user ID")
    return user_ids
