"""Mode manager and the line-driven editor modes."""

from .base_mode import Mode, ModeBus, ModeContext, ModeResult
from .command_mode import CommandMode
from .insert_mode import InsertMode
from .edit_mode import EditMode
from .mode_manager import ModeManager

__all__ = [
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "CommandMode",
    "InsertMode",
    "EditMode",
    "ModeManager",
]
