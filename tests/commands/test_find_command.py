"""Tests for command tree matching."""

from __future__ import annotations

from chatcmd.core.commands import Command, find_command


async def _noop(ctx, *args):
    return None


def _tree():
    config_get = Command(name="get", action=_noop)
    config_set = Command(name="set", action=_noop, aliases=("put",))
    config = Command(name="config", action=_noop, subcommands=(config_get, config_set))
    ping = Command(name="ping", action=_noop, aliases=("p",))
    return [ping, config], ping, config, config_get, config_set


class TestFindCommand:
    """Resolving the leading words of a message to a command."""

    def test_top_level_with_arguments(self):
        commands, ping, *_ = _tree()
        print("\n INPUT: 'ping   the   server'")
        result = find_command(commands, "ping   the   server")
        print(f" OUTPUT: {result}")
        assert result == (ping, "ping", "the   server")

    def test_alias_reports_typed_name(self):
        commands, ping, *_ = _tree()
        assert find_command(commands, "p now") == (ping, "p", "now")

    def test_subcommand_wins(self):
        commands, _, _, config_get, _ = _tree()
        assert find_command(commands, "config get key") == (config_get, "get", "key")

    def test_subcommand_alias(self):
        commands, _, _, _, config_set = _tree()
        assert find_command(commands, "config put key value") == (config_set, "put", "key value")

    def test_unknown_subcommand_is_an_argument(self):
        commands, _, config, _, _ = _tree()
        assert find_command(commands, "config reload now") == (config, "config", "reload now")

    def test_parent_without_arguments(self):
        commands, _, config, _, _ = _tree()
        assert find_command(commands, "config") == (config, "config", "")

    def test_any_whitespace_separates_name(self):
        commands, ping, *_ = _tree()
        assert find_command(commands, "ping\n  line two") == (ping, "ping", "line two")
        assert find_command(commands, "ping\tx") == (ping, "ping", "x")

    def test_no_match(self):
        commands, *_ = _tree()
        assert find_command(commands, "pong") is None
        assert find_command(commands, "") is None

    def test_case_sensitivity(self):
        commands, ping, *_ = _tree()
        assert find_command(commands, "PING") is None
        assert find_command(commands, "PING", case_insensitive=True) == (ping, "PING", "")

    def test_first_matching_command_wins(self):
        first = Command(name="dup", action=_noop)
        second = Command(name="dup", action=_noop)
        assert find_command([first, second], "dup")[0] is first

    def test_nested_lookup_example(self):
        """``ping ping ping`` only matches the innermost ``ping`` it can reach."""
        inner = Command(name="ping", action=_noop)
        outer = Command(name="ping", action=_noop, subcommands=(inner,))
        assert find_command([outer], "ping ping ping") == (inner, "ping", "ping")
