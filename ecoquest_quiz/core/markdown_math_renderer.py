"""Markdown rendering for question prompts and explanations.

Prompts and explanations are authored as CommonMark with inline LaTeX
(``$...$``); they are converted to HTML fragments here and MathJax in the
learner's browser typesets the math.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownMathRenderer:
    """Converts markdown-with-math into HTML fragments."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_optional(self, markdown_text: str | None) -> str | None:
        """Render text that may be absent, e.g. an explanation."""
        if markdown_text is None or not markdown_text.strip():
            return None
        return self._markdown.render(markdown_text.strip())


# Shared by the Qt and API threads; rendering does not mutate parser state.
renderer = MarkdownMathRenderer()
