"""Navigation and modal-editing engine.

Pure state objects (cursor, edit buffer, selection, history) plus the mode
controller that mutates them one key at a time. Nothing here touches the
terminal or the filesystem directly; side effects go through services.
"""

from .cursor import CursorSnapshot, NavigationCursor, ViewportGeometry
from .edit_buffer import EditBuffer, is_editable
from .history import HistoryStack
from .modes import Browse, ConfirmAction, ConfirmPrompt, HelpView, LineEdit, LineEditKind, Mode, VisualSelect
from .selection import SelectionRange

__all__ = [
    "CursorSnapshot",
    "NavigationCursor",
    "ViewportGeometry",
    "EditBuffer",
    "is_editable",
    "HistoryStack",
    "Browse",
    "VisualSelect",
    "LineEdit",
    "LineEditKind",
    "ConfirmPrompt",
    "ConfirmAction",
    "HelpView",
    "Mode",
    "SelectionRange",
]
