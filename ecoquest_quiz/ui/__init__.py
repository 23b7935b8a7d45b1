"""Qt UI components for the quiz library."""

from .dialog_helpers import (
    QtConfirmer,
    QtNotifier,
    QtQuizFileDialogs,
    ask_yes_no,
    show_error,
    show_info,
    show_warning,
)
from .quiz_library_window import QuizLibraryWindow

__all__ = [
    "QuizLibraryWindow",
    "QtConfirmer",
    "QtNotifier",
    "QtQuizFileDialogs",
    "ask_yes_no",
    "show_error",
    "show_info",
    "show_warning",
]
