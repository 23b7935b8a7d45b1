"""Qt dialogs backing the notifier, confirmer and file-picker surfaces."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtWidgets import QFileDialog, QMessageBox, QWidget

from ecoquest_quiz.constants.ui_constants import (
    EXPORT_DIALOG_TITLE,
    EXPORT_FILE_FILTER,
    IMPORT_DIALOG_TITLE,
    IMPORT_FILE_FILTER,
)


def ask_yes_no(parent: QWidget | None, title: str, message: str) -> bool:
    """Show a Yes/No question defaulting to No.

    Returns:
        True if user confirmed, False otherwise
    """
    reply = QMessageBox.question(
        parent,
        title,
        message,
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return reply == QMessageBox.Yes


def show_error(parent: QWidget | None, title: str, message: str) -> None:
    QMessageBox.critical(parent, title, message)


def show_info(parent: QWidget | None, title: str, message: str) -> None:
    QMessageBox.information(parent, title, message)


def show_warning(parent: QWidget | None, title: str, message: str) -> None:
    QMessageBox.warning(parent, title, message)


class QtNotifier:
    """Shows notifications as message boxes."""

    def __init__(self, parent: QWidget | None = None) -> None:
        self._parent = parent

    def notify(self, title: str, message: str, *, error: bool = False) -> None:
        if error:
            show_error(self._parent, title, message)
        else:
            show_info(self._parent, title, message)


class QtConfirmer:
    """Asks confirmations with a Yes/No message box."""

    def __init__(self, parent: QWidget | None = None) -> None:
        self._parent = parent

    def confirm(self, title: str, message: str) -> bool:
        return ask_yes_no(self._parent, title, message)


class QtQuizFileDialogs:
    """Native file pickers for exporting and importing quiz files."""

    def __init__(self, parent: QWidget | None = None, start_dir: Path | None = None) -> None:
        self._parent = parent
        self._start_dir = start_dir or Path.home()

    def choose_export_path(self, suggested_name: str) -> Path | None:
        file_name, _ = QFileDialog.getSaveFileName(
            self._parent,
            EXPORT_DIALOG_TITLE,
            str(self._start_dir / suggested_name),
            EXPORT_FILE_FILTER,
        )
        if not file_name:
            return None
        path = Path(file_name)
        self._start_dir = path.parent
        return path

    def choose_import_path(self) -> Path | None:
        file_name, _ = QFileDialog.getOpenFileName(
            self._parent,
            IMPORT_DIALOG_TITLE,
            str(self._start_dir),
            IMPORT_FILE_FILTER,
        )
        if not file_name:
            return None
        path = Path(file_name)
        self._start_dir = path.parent
        return path
