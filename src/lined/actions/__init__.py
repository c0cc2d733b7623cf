"""Editor command handlers reused by every front end."""

from .commands import HELP_LINES, leading_int, submit_command_line

__all__ = ["HELP_LINES", "leading_int", "submit_command_line"]
