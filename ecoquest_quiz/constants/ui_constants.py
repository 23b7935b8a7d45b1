"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "EcoQuest Quiz Library"
SEARCH_PLACEHOLDER: str = "Search quizzes..."
STATUS_FILTER_ALL: str = "All statuses"

BUTTON_IMPORT: str = "Import Quiz"
BUTTON_EXPORT: str = "Export Quiz"
BUTTON_DUPLICATE: str = "Duplicate"
BUTTON_DELETE: str = "Delete"
BUTTON_PUBLISH: str = "Publish / Unpublish"

IMPORT_DIALOG_TITLE: str = "Select quiz file"
IMPORT_FILE_FILTER: str = "Quiz files (*.json);;All files (*.*)"
EXPORT_DIALOG_TITLE: str = "Export quiz to file"
EXPORT_FILE_FILTER: str = "Quiz files (*.json);;All files (*.*)"

NO_QUIZ_SELECTED_MESSAGE: str = "Please select a quiz first."
EMPTY_LIBRARY_MESSAGE: str = "No quizzes yet. Import one to get started."
