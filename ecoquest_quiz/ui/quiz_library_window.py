"""Qt main window listing the quiz library."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ecoquest_quiz.constants.ui_constants import (
    BUTTON_DELETE,
    BUTTON_DUPLICATE,
    BUTTON_EXPORT,
    BUTTON_IMPORT,
    BUTTON_PUBLISH,
    EMPTY_LIBRARY_MESSAGE,
    NO_QUIZ_SELECTED_MESSAGE,
    SEARCH_PLACEHOLDER,
    STATUS_FILTER_ALL,
    WINDOW_TITLE,
)
from ecoquest_quiz.core.errors import QuizImportError, QuizStorageError
from ecoquest_quiz.core.models import Quiz, QuizStatus
from ecoquest_quiz.core.quiz_catalog import filter_quizzes, toggle_publish, total_points
from ecoquest_quiz.core.quiz_exporter import save_quiz_to_file
from ecoquest_quiz.core.quiz_importer import load_quiz_from_file
from ecoquest_quiz.core.services.quiz_store import QuizDataStore
from ecoquest_quiz.ui.dialog_helpers import (
    QtConfirmer,
    QtNotifier,
    QtQuizFileDialogs,
    show_warning,
)


class QuizLibraryWindow(QMainWindow):
    """Browse, import, export, duplicate, delete and publish quizzes."""

    # Store notifications can arrive from the API thread; the signal hops
    # them onto the GUI thread.
    library_changed = Signal()

    def __init__(self, store: QuizDataStore, student_url: str | None = None) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.store = store
        self.student_url = student_url
        self._notifier = QtNotifier(self)
        self._confirmer = QtConfirmer(self)
        self._file_dialogs = QtQuizFileDialogs(self)

        self._build_ui()
        self.library_changed.connect(self._refresh_list)
        self._unsubscribe = store.subscribe(lambda _quizzes: self.library_changed.emit())
        self._refresh_list()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout()
        central_widget.setLayout(layout)

        filter_row = QHBoxLayout()
        self.search_input = QLineEdit(self)
        self.search_input.setPlaceholderText(SEARCH_PLACEHOLDER)
        self.search_input.textChanged.connect(lambda _: self._refresh_list())
        filter_row.addWidget(self.search_input)

        self.status_combo = QComboBox(self)
        self.status_combo.addItem(STATUS_FILTER_ALL, userData=None)
        for status in QuizStatus:
            self.status_combo.addItem(status.value.capitalize(), userData=status)
        self.status_combo.currentIndexChanged.connect(lambda _: self._refresh_list())
        filter_row.addWidget(self.status_combo)
        layout.addLayout(filter_row)

        self.quiz_list = QListWidget(self)
        layout.addWidget(self.quiz_list)

        self.empty_label = QLabel(EMPTY_LIBRARY_MESSAGE, self)
        self.empty_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.empty_label)

        if self.student_url:
            layout.addWidget(QLabel(f"Learner API: {self.student_url}", self))

        action_row = QHBoxLayout()
        for text, handler in (
            (BUTTON_IMPORT, self._handle_import),
            (BUTTON_EXPORT, self._handle_export),
            (BUTTON_DUPLICATE, self._handle_duplicate),
            (BUTTON_DELETE, self._handle_delete),
            (BUTTON_PUBLISH, self._handle_toggle_publish),
        ):
            button = QPushButton(text, self)
            button.clicked.connect(handler)
            action_row.addWidget(button)
        layout.addLayout(action_row)

    def _refresh_list(self) -> None:
        selected_id = self._selected_quiz_id()
        quizzes = filter_quizzes(
            self.store.quizzes,
            search=self.search_input.text(),
            status=self.status_combo.currentData(),
        )
        self.quiz_list.clear()
        for quiz in quizzes:
            item = QListWidgetItem(self._describe(quiz))
            item.setData(Qt.UserRole, quiz.id)
            self.quiz_list.addItem(item)
            if quiz.id == selected_id:
                self.quiz_list.setCurrentItem(item)
        self.empty_label.setVisible(not quizzes)

    def _describe(self, quiz: Quiz) -> str:
        course = self.store.get_course(quiz.course_id)
        course_label = course.code if course else "No course"
        return (
            f"{quiz.title}  [{quiz.status.value}]  {course_label} - "
            f"{len(quiz.questions)} questions, {total_points(quiz)} pts"
        )

    def _selected_quiz_id(self) -> str | None:
        item = self.quiz_list.currentItem()
        return item.data(Qt.UserRole) if item is not None else None

    def _require_selection(self) -> str | None:
        quiz_id = self._selected_quiz_id()
        if quiz_id is None:
            show_warning(self, WINDOW_TITLE, NO_QUIZ_SELECTED_MESSAGE)
        return quiz_id

    def _handle_import(self) -> None:
        path = self._file_dialogs.choose_import_path()
        if path is None:
            return
        try:
            quiz = self.store.import_quiz(load_quiz_from_file(path))
        except QuizImportError as exc:
            self._notifier.notify("Import Failed", f"Invalid quiz format: {exc}", error=True)
            return
        except QuizStorageError as exc:
            self._notifier.notify("Error", str(exc), error=True)
            return
        self._notifier.notify("Quiz Imported", f'"{quiz.title}" has been imported as a draft.')

    def _handle_export(self) -> None:
        quiz_id = self._require_selection()
        if quiz_id is None:
            return
        export = self.store.export_quiz(quiz_id)
        if export is None:
            return
        path = self._file_dialogs.choose_export_path(export.filename)
        if path is None:
            return
        try:
            saved_path = save_quiz_to_file(path, export)
        except OSError as exc:
            self._notifier.notify("Export Failed", str(exc), error=True)
            return
        self._notifier.notify("Quiz Exported", f"Saved to {saved_path}.")

    def _handle_duplicate(self) -> None:
        quiz_id = self._require_selection()
        if quiz_id is None:
            return
        try:
            copy = self.store.duplicate_quiz(quiz_id)
        except QuizStorageError as exc:
            self._notifier.notify("Error", str(exc), error=True)
            return
        if copy is not None:
            self._notifier.notify("Quiz Duplicated", f'"{copy.title}" has been created.')

    def _handle_delete(self) -> None:
        quiz_id = self._require_selection()
        if quiz_id is None:
            return
        quiz = self.store.get_quiz(quiz_id)
        if quiz is None or not self._confirmer.confirm(
            "Confirm Delete", f'Are you sure you want to delete "{quiz.title}"?'
        ):
            return
        try:
            self.store.delete_quiz(quiz_id)
        except QuizStorageError as exc:
            self._notifier.notify("Error", str(exc), error=True)

    def _handle_toggle_publish(self) -> None:
        quiz_id = self._require_selection()
        if quiz_id is None:
            return
        try:
            quiz = toggle_publish(self.store, quiz_id, self._confirmer)
        except QuizStorageError as exc:
            self._notifier.notify("Error", str(exc), error=True)
            return
        if quiz is not None:
            self._notifier.notify(
                "Quiz Status", f'"{quiz.title}" status is now {quiz.status.value}.'
            )

    def closeEvent(self, event) -> None:  # noqa: N802 - Qt override
        self._unsubscribe()
        super().closeEvent(event)
