import re
from pathlib import Path

from ..core.model import StageContent
from .yaml_codec import YamlFrontmatter

HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
LIST_ITEM_RE = re.compile(r"^(?:[-*]|\d+[.)])\s+(.+)$")

SECTION_ALIASES = {
    "what_was": ("что было", "what was", "what was needed", "problem"),
    "solution": ("решение", "solution"),
    "why_solution": ("почему такое решение", "почему это решение", "why this solution", "why"),
    "pros": ("плюсы", "pros"),
    "cons": ("минусы", "cons"),
    "gotchas": ("подводные камни", "gotchas", "pitfalls"),
    "what_done": ("что сделано", "what was done", "what's done", "done"),
}
_ALIAS_TO_KEY = {alias: key for key, aliases in SECTION_ALIASES.items() for alias in aliases}


def section_key(heading: str) -> str | None:
    """Map a section heading ("## Что было:", "## 🎯 Solution") to a StageContent field."""
    name = re.sub(r"^[^\w]+", "", heading.strip()).rstrip(" :").lower()
    return _ALIAS_TO_KEY.get(name)


class StageParser:
    def __init__(self, fm: YamlFrontmatter | None = None):
        self.fm = fm or YamlFrontmatter()

    def parse(self, text: str) -> StageContent:
        meta, body = self.fm.decode(text)
        content = StageContent(title=str(meta.get("title") or ""))

        sections: dict[str, list[str]] = {}
        current: str | None = None

        for ln in body.split("\n"):
            stripped = ln.strip()
            m = HEADING_RE.match(stripped)
            if m:
                level = len(m.group(1))
                if level == 1:
                    if not content.title:
                        content.title = m.group(2).strip()
                    current = None
                    continue
                key = section_key(m.group(2))
                if key is not None:
                    current = key
                    sections.setdefault(key, [])
                    continue
                if level == 2:
                    # Unknown top-level section: its text belongs nowhere
                    current = None
                    continue
            if current is not None:
                sections[current].append(ln.rstrip())

        for key, lines in sections.items():
            if key == "what_done":
                content.what_done = [
                    m.group(1).strip()
                    for m in (LIST_ITEM_RE.match(line.strip()) for line in lines)
                    if m
                ]
            else:
                setattr(content, key, "\n".join(lines).strip())

        return content

    def parse_file(self, path: Path) -> StageContent:
        if not path.exists():
            return StageContent()
        return self.parse(path.read_text(encoding="utf-8"))

    def read_meta(self, path: Path) -> dict:
        """Frontmatter of *path*, with ``title`` filled from the first H1 if absent."""
        meta, body = self.fm.decode(path.read_text(encoding="utf-8"))
        meta = dict(meta)
        if not meta.get("title"):
            for ln in body.split("\n"):
                m = HEADING_RE.match(ln.strip())
                if m and len(m.group(1)) == 1:
                    meta["title"] = m.group(2).strip()
                    break
        return meta
