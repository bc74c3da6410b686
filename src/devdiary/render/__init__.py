"""HTML rendering: Markdown blocks and project-name auto-linking."""

from .linker import LinkInjector, inject_links, join_segments, split_segments
from .markdown import MarkdownRenderer, markdown_to_plain, process_inline, render_markdown

__all__ = [
    "LinkInjector",
    "MarkdownRenderer",
    "inject_links",
    "join_segments",
    "markdown_to_plain",
    "process_inline",
    "render_markdown",
    "split_segments",
]
