"""Static metadata describing EcoQuest Quiz Studio."""

APP_NAME = "EcoQuest Quiz Studio"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "EcoQuest Quiz Studio lets teachers author environmental-science quizzes, "
    "keep them in a local library and grade learner submissions through a small web API."
)
