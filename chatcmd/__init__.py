"""chatcmd: prefix command resolution and backtracking argument parsing for chat bots."""

__version__ = "0.1.0"
