"""Application entry point for EcoQuest Quiz Studio."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from ecoquest_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from ecoquest_quiz.constants.storage_constants import DEFAULT_STORAGE_PATH, DEMO_MODE
from ecoquest_quiz.core.services.quiz_store import QuizDataStore
from ecoquest_quiz.core.services.storage import JsonFileStorage
from ecoquest_quiz.core.session_state import UserSession
from ecoquest_quiz.server.api_server import start_api_server
from ecoquest_quiz.ui.quiz_library_window import QuizLibraryWindow
from ecoquest_quiz.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging, open the library, start the API server, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting EcoQuest Quiz Studio...")

    storage = JsonFileStorage(DEFAULT_STORAGE_PATH)
    store = QuizDataStore(storage, demo_mode=DEMO_MODE)
    store.load()
    session = UserSession(storage)
    logger.info(
        "Library at %s holds %d quizzes (demo mode %s)",
        storage.file_path,
        len(store.quizzes),
        "on" if DEMO_MODE else "off",
    )

    start_api_server(store=store, session=session, host=DEFAULT_HOST, port=DEFAULT_PORT)
    api_url = f"http://{DEFAULT_HOST}:{DEFAULT_PORT}/api/quizzes"
    logger.info("Learner API available at %s", api_url)

    app = QApplication(sys.argv)
    window = QuizLibraryWindow(store=store, student_url=api_url)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
