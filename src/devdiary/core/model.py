from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

LANGS = ("ru", "en")
DEFAULT_LANG = "ru"


@dataclass(frozen=True)
class LinkTarget:
    name: str  # project display name as it appears in prose
    url: str


@dataclass(frozen=True)
class HtmlSegment:
    text: str
    is_tag: bool
    index: int


@dataclass
class Project:
    name: str  # directory name, e.g. "lofiradio_log"
    dir: Path
    url: str = ""

    @property
    def display_name(self) -> str:
        return self.name[:-4] if self.name.endswith("_log") else self.name

    @property
    def stages_dir(self) -> Path:
        return self.dir / "stages"

    def screenshots_dir(self, lang: str) -> Path:
        return self.dir / "screenshots" / lang


@dataclass
class StageMeta:
    project_name: str
    date: str
    title: str
    stage_file: Path


@dataclass
class StageContent:
    title: str = ""
    what_was: str = ""
    solution: str = ""
    why_solution: str = ""
    pros: str = ""
    cons: str = ""
    gotchas: str = ""
    what_done: list[str] = field(default_factory=list)

    def sections(self) -> list[tuple[str, str]]:
        """(section key, markdown) pairs in page order, the list section excluded."""
        return [
            ("what_was", self.what_was),
            ("solution", self.solution),
            ("why_solution", self.why_solution),
            ("pros", self.pros),
            ("cons", self.cons),
            ("gotchas", self.gotchas),
        ]
