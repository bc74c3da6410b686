import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path

from ..core.model import Project, StageMeta
from ..errors import ConfigError
from ..locales import read_localized
from .stage_parser import StageParser

logger = logging.getLogger(__name__)

PROJECT_SUFFIX = "_log"
STAGES_INDEX = "stages-index.json"
INTRO_FILE = "intro.md"
LEGACY_EN_INTRO = "intro.en.md"
URL_FILE = "project-url.txt"
SCREENSHOT_EXTS = (".png", ".jpg", ".jpeg")


def _date_key(value: str) -> tuple:
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return (1, value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return (0, parsed)


def sort_stages(stages: list[StageMeta]) -> list[StageMeta]:
    """Stable sort by date; ISO dates first, anything unparseable after them."""
    return sorted(stages, key=lambda s: _date_key(s.date))


class FsProjects:
    """
    Input tree layout: <root>/<name>_log/{intro.md, project-url.txt, stages/, screenshots/}
    """

    def __init__(self, root: Path, parser: StageParser | None = None, default_url: str = ""):
        self.root = root
        self.parser = parser or StageParser()
        self.default_url = default_url

    def find_projects(self) -> list[Project]:
        if not self.root.exists():
            return []
        projects = []
        for p in sorted(self.root.iterdir()):
            if p.is_dir() and p.name.endswith(PROJECT_SUFFIX):
                projects.append(Project(name=p.name, dir=p, url=self.read_url(p)))
        return projects

    def read_url(self, project_dir: Path) -> str:
        p = project_dir / URL_FILE
        if p.exists():
            return p.read_text(encoding="utf-8").strip()
        if not self.default_url:
            logger.warning("No %s in project %s", URL_FILE, project_dir.name)
        return self.default_url

    def intro_path(self, project: Project) -> Path:
        p = project.dir / INTRO_FILE
        if not p.exists():
            p = project.stages_dir / INTRO_FILE
        return p

    def read_intro(self, project: Project, lang: str) -> str:
        """Project description for *lang*; the legacy English file sits in the project root."""
        return read_localized(
            project.dir,
            INTRO_FILE,
            lang,
            default=self.intro_path(project),
            legacy=project.dir / LEGACY_EN_INTRO,
        )

    def load_stages(self, project: Project) -> list[StageMeta]:
        """Stages of *project* whose files exist, sorted by date."""
        index_path = project.stages_dir / STAGES_INDEX
        if index_path.exists():
            stages = self._stages_from_index(project, index_path)
        else:
            stages = self._stages_from_files(project)

        existing = []
        for stage in stages:
            if stage.stage_file.exists():
                existing.append(stage)
            else:
                logger.warning("Stage file missing: %s", stage.stage_file)
        return sort_stages(existing)

    def _stages_from_index(self, project: Project, index_path: Path) -> list[StageMeta]:
        try:
            data = json.loads(index_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid {index_path}: {e}") from e

        if isinstance(data, dict):
            data = data.get("stages", [])
        if not isinstance(data, list):
            raise ConfigError(f"Invalid {index_path}: expected a list of stages")

        stages = []
        for entry in data:
            if not isinstance(entry, dict) or not entry.get("file"):
                logger.warning("Skipping stage entry without 'file' in %s", index_path)
                continue
            stages.append(StageMeta(
                project_name=project.name,
                date=str(entry.get("date", "")),
                title=str(entry.get("title", "")),
                stage_file=project.stages_dir / entry["file"],
            ))
        return stages

    def _stages_from_files(self, project: Project) -> list[StageMeta]:
        if not project.stages_dir.exists():
            return []
        stages = []
        for p in sorted(project.stages_dir.glob("*.md")):
            if p.name == INTRO_FILE or p.name.endswith(".en.md"):
                continue
            meta = self.parser.read_meta(p)
            value = meta.get("date", "")
            if isinstance(value, (date, datetime)):
                value = value.isoformat()
            stages.append(StageMeta(
                project_name=project.name,
                date=str(value),
                title=str(meta.get("title", "")),
                stage_file=p,
            ))
        return stages

    def screenshots(self, project: Project, lang: str) -> list[Path]:
        src = project.screenshots_dir(lang)
        if not src.exists():
            return []
        return sorted(p for p in src.iterdir() if p.is_file() and p.suffix.lower() in SCREENSHOT_EXTS)
