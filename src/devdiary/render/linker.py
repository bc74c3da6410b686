"""
Project-name auto-linker for assembled diary pages.

Rewrites plain-text mentions of known project names into anchors. The page
is split on literal tag boundaries; only text segments are rewritten. Text
inside <head>, <style> or <script>, and text that is the label of an anchor
(or of <title>/<h1>), is left alone. The split is a heuristic over the controlled page template, not an
HTML parser.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from ..core.model import HtmlSegment, LinkTarget

_HTML_TAG_RE = re.compile(r"(<[^>]+>)")

EXCLUSION_MARKERS = (
    "<title", "</title", "<meta", "<head", "</head", "<a ", "</a>", "<h1", "</h1>",
)
# Opening tags whose immediate text content is never linked
_LABEL_TAG_RE = re.compile(r"^<(title|h1)\b", re.IGNORECASE)
# Elements whose whole content is never linked
_OPAQUE_OPEN_RE = re.compile(r"^<(head|style|script)\b", re.IGNORECASE)
_OPAQUE_CLOSE_RE = re.compile(r"^</(head|style|script)\s*>", re.IGNORECASE)

DEFAULT_ANCHOR_WINDOW = 10

LINK_STYLE = "color: #3498db; text-decoration: none; border-bottom: 1px solid #3498db;"


def split_segments(html: str) -> list[HtmlSegment]:
    """Split *html* into alternating text and tag segments.

    Joining the segment texts in order gives back *html* unchanged.
    """
    return [
        HtmlSegment(text=part, is_tag=i % 2 == 1, index=i)
        for i, part in enumerate(_HTML_TAG_RE.split(html))
    ]


def join_segments(segments: Iterable[HtmlSegment]) -> str:
    return "".join(seg.text for seg in sorted(segments, key=lambda s: s.index))


def is_excluded_tag(tag: str) -> bool:
    lowered = tag.lower()
    return any(marker in lowered for marker in EXCLUSION_MARKERS)


def overlaps_title(name: str, site_title: str | None) -> bool:
    """True when *name* and the site title contain one another (case-insensitive)."""
    if not site_title:
        return False
    a, b = name.lower(), site_title.lower()
    return a in b or b in a


def filter_targets(targets: Iterable[LinkTarget], site_title: str | None = None) -> list[LinkTarget]:
    return [t for t in targets if t.name and not overlaps_title(t.name, site_title)]


def anchor_html(url: str, label: str) -> str:
    return (
        f'<a href="{url}" target="_blank" rel="noopener noreferrer" '
        f'style="{LINK_STYLE}">{label}</a>'
    )


def _is_anchor_label(segments: Sequence[HtmlSegment], i: int, window: int) -> bool:
    prev = segments[i - 1].text.lower()
    if "<a " not in prev or "</a>" in prev:
        return False
    upper = min(len(segments), i + window)
    return any("</a>" in segments[j].text for j in range(i + 1, upper))


def _skip_text(segments: Sequence[HtmlSegment], i: int, window: int) -> bool:
    if i == 0:
        return False
    prev = segments[i - 1]
    if not prev.is_tag or not is_excluded_tag(prev.text):
        return False
    if _LABEL_TAG_RE.match(prev.text):
        return True
    return _is_anchor_label(segments, i, window)


def _name_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf"\b({re.escape(name)})\b(?![^<]*</a>)", re.IGNORECASE)


def link_text(text: str, targets: Iterable[LinkTarget]) -> str:
    """Wrap standalone occurrences of each target name in *text*."""
    for target in targets:
        text = _name_pattern(target.name).sub(
            lambda m, url=target.url: anchor_html(url, m.group(0)), text
        )
    return text


def inject_links(
    html: str,
    targets: Iterable[LinkTarget],
    site_title: str | None = None,
    anchor_window: int = DEFAULT_ANCHOR_WINDOW,
) -> str:
    """
    Link plain-text mentions of *targets* inside an assembled page.

    Args:
        html: Full page markup
        targets: Names and URLs to link
        site_title: Diary title; targets overlapping it are not linked
        anchor_window: How many segments after an opening ``<a ...>`` are
            searched for its ``</a>``

    Returns:
        Page markup with links injected. Not idempotent: call once per page.
    """
    if not html:
        return html

    active = filter_targets(targets, site_title)
    if not active:
        return html

    segments = split_segments(html)
    out: list[HtmlSegment] = []
    opaque: set[str] = set()
    for i, seg in enumerate(segments):
        if seg.is_tag:
            m = _OPAQUE_OPEN_RE.match(seg.text)
            if m:
                opaque.add(m.group(1).lower())
            m = _OPAQUE_CLOSE_RE.match(seg.text)
            if m:
                opaque.discard(m.group(1).lower())
        if seg.is_tag or not seg.text or opaque or _skip_text(segments, i, anchor_window):
            out.append(seg)
            continue
        out.append(HtmlSegment(text=link_text(seg.text, active), is_tag=False, index=seg.index))

    return join_segments(out)


class LinkInjector:
    def __init__(
        self,
        targets: Iterable[LinkTarget],
        site_title: str | None = None,
        anchor_window: int = DEFAULT_ANCHOR_WINDOW,
    ):
        self.targets = list(targets)
        self.site_title = site_title
        self.anchor_window = anchor_window

    def inject(self, html: str) -> str:
        return inject_links(html, self.targets, self.site_title, self.anchor_window)
