"""Textual front end for the line editor."""

from .controller import LinedAdapter, TextualUIHooks

__all__ = ["LinedAdapter", "TextualUIHooks"]
