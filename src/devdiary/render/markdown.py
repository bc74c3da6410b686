"""Line-oriented Markdown to HTML renderer for diary entries.

Only the subset written by the diary authoring format is understood:
headings, flat lists, paragraphs, standalone images and the inline
bold/italic/link/code markup. Anything else degrades to a paragraph.
"""

import re
from enum import Enum

from ..core.ports import ImageHandler

IMAGE_RE = re.compile(r"^!\[(.*?)\]\((.*?)\)$")
HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
NUMBERED_RE = re.compile(r"^(\d+)[.)]\s+(.+)$")
BULLET_RE = re.compile(r"^[-*]\s+(.+)$")

SCREENSHOT_MARKERS = ("screenshots/ru/", "screenshots/en/")

# Applied in order; each pass sees the output of the previous one.
_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)
_INLINE_RULES = (
    (re.compile(r"\*\*(.+?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"\*(.+?)\*"), r"<em>\1</em>"),
    (
        re.compile(r"\[([^\]]+)\]\(([^)]+)\)"),
        r'<a href="\2" target="_blank" rel="noopener noreferrer">\1</a>',
    ),
    (re.compile(r"`([^`]+)`"), r"<code>\1</code>"),
)

_STRIP_RULES = (
    (re.compile(r"^#+\s+", re.MULTILINE), ""),
    (re.compile(r"\*\*(.*?)\*\*"), r"\1"),
    (re.compile(r"\*(.*?)\*"), r"\1"),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"\n+"), " "),
)


class ListState(Enum):
    NO_LIST = "none"
    IN_LIST = "list"


def escape_html(text: str) -> str:
    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


def process_inline(text: str | None) -> str:
    """Escape HTML, then expand bold, italic, links and inline code."""
    if not text:
        return ""
    text = escape_html(text)
    for pattern, repl in _INLINE_RULES:
        text = pattern.sub(repl, text)
    return text


def markdown_to_plain(text: str | None, limit: int = 160) -> str:
    """Flatten Markdown to a single line of plain text (for meta descriptions)."""
    if not text:
        return ""
    for pattern, repl in _STRIP_RULES:
        text = pattern.sub(repl, text)
    return text.strip()[:limit]


def _close(state: ListState) -> list[str]:
    return ["</ul>"] if state is ListState.IN_LIST else []


def _open(state: ListState) -> list[str]:
    return [] if state is ListState.IN_LIST else ["<ul>"]


def _render_image(alt: str, path: str, image_handler: ImageHandler | None) -> list[str]:
    if image_handler is None:
        return []
    if not any(marker in path for marker in SCREENSHOT_MARKERS):
        return []
    file_name = path.split("/")[-1]
    html = image_handler(file_name, alt)
    return [html] if html else []


def render_line(
    state: ListState,
    line: str,
    image_handler: ImageHandler | None = None,
) -> tuple[ListState, list[str]]:
    """Classify one stripped line.

    Returns the list state after the line and the HTML pieces it emits.
    """
    if not line:
        return ListState.NO_LIST, _close(state)

    m = IMAGE_RE.match(line)
    if m:
        return ListState.NO_LIST, _close(state) + _render_image(m.group(1), m.group(2), image_handler)

    m = HEADING_RE.match(line)
    if m:
        level = len(m.group(1))
        heading = f"<h{level}>{process_inline(m.group(2))}</h{level}>"
        return ListState.NO_LIST, _close(state) + [heading]

    m = NUMBERED_RE.match(line)
    item = m.group(2) if m else None
    if item is None:
        m = BULLET_RE.match(line)
        item = m.group(1) if m else None
    if item is not None:
        return ListState.IN_LIST, _open(state) + [f"<li>{process_inline(item)}</li>"]

    return ListState.NO_LIST, _close(state) + [f"<p>{process_inline(line)}</p>"]


def render_markdown(
    markdown: str | None,
    image_handler: ImageHandler | None = None,
    newline: str = "",
) -> str:
    """Render a Markdown block to an HTML fragment.

    Numbered and bulleted items share a single ``<ul>``; an image line is
    emitted only when ``image_handler`` accepts it. Never raises on
    malformed input.

    Args:
        markdown: Markdown source (None and "" render to "")
        image_handler: Callback receiving (file name, alt text) for
            screenshot images
        newline: Separator written after every emitted element

    Returns:
        HTML fragment without any document wrapper
    """
    if not markdown:
        return ""

    state = ListState.NO_LIST
    parts: list[str] = []
    for raw_line in markdown.split("\n"):
        state, emitted = render_line(state, raw_line.strip(), image_handler)
        parts.extend(emitted)
    parts.extend(_close(state))

    return "".join(part + newline for part in parts)


class MarkdownRenderer:
    def __init__(self, newline: str = ""):
        self.newline = newline

    def render(self, markdown: str | None, image_handler: ImageHandler | None = None) -> str:
        return render_markdown(markdown, image_handler, newline=self.newline)
