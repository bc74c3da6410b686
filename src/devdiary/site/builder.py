"""Static site builder: main pages, project pages, redirect and screenshots."""

import logging
import shutil
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from ..adapters.fs_projects import FsProjects
from ..adapters.stage_parser import StageParser
from ..config import DiaryConfig
from ..core.model import LANGS, LinkTarget, Project, StageMeta
from ..locales import resolve_localized
from ..render.linker import inject_links
from ..render.markdown import markdown_to_plain
from . import blocks
from .labels import label
from .templating import fill_template, load_template, localize_head, replace_footer, set_html_lang

logger = logging.getLogger(__name__)

REDIRECT_PAGE = """<!DOCTYPE html>
<html lang="ru">
<head>
    <meta charset="UTF-8">
    <title>Redirecting...</title>
    <meta http-equiv="refresh" content="0; url=ru/index.html">
    <script>window.location.href = 'ru/index.html';</script>
</head>
<body>
    <p>Redirecting to <a href="ru/index.html">Russian version</a>...</p>
</body>
</html>
"""


@dataclass
class BuildReport:
    """What a build wrote."""
    pages: list[Path] = field(default_factory=list)
    projects: int = 0
    stages: int = 0
    screenshots: int = 0


class SiteBuilder:
    def __init__(
        self,
        config: DiaryConfig,
        source: FsProjects | None = None,
        template: str | None = None,
        today: date | None = None,
    ):
        self.config = config
        self.source = source or FsProjects(
            config.paths.input, default_url=config.site.project_url
        )
        self.parser = self.source.parser
        self.template = template
        self.today = today

    @property
    def out(self) -> Path:
        return self.config.paths.output

    def build(self) -> BuildReport:
        template = self.template if self.template is not None else load_template(self.config.paths.template)

        projects = self.source.find_projects()
        if not projects:
            logger.warning("No projects found in %s (expected <name>_log directories)", self.config.paths.input)

        stages_by_project = {p.name: self.source.load_stages(p) for p in projects}
        with_stages = [p for p in projects if stages_by_project[p.name]]
        report = BuildReport(
            projects=len(with_stages),
            stages=sum(len(s) for s in stages_by_project.values()),
        )
        logger.info("Found %d stages in %d projects", report.stages, report.projects)

        for lang in LANGS:
            (self.out / lang).mkdir(parents=True, exist_ok=True)

        site_url = self.config.site.project_url or (with_stages[0].url if with_stages else "")
        targets = self.link_targets(with_stages, site_url)

        for lang in LANGS:
            html = self.main_page(template, lang, with_stages, stages_by_project, site_url)
            html = inject_links(
                html, targets, self.config.site.project_name, self.config.links.anchor_window
            )
            report.pages.append(self._write(self.out / lang / "index.html", html))

        report.pages.append(self._write(self.out / "index.html", REDIRECT_PAGE))

        for project in with_stages:
            stages = stages_by_project[project.name]
            for lang in LANGS:
                html = self.project_page(template, lang, project, stages)
                if self.config.links.project_pages:
                    html = inject_links(
                        html, targets, self.config.site.project_name, self.config.links.anchor_window
                    )
                page_dir = self.out / lang / project.display_name
                report.pages.append(self._write(page_dir / "index.html", html))
                report.screenshots += self.copy_screenshots(project, lang, page_dir / "screenshots")
            logger.info("Built %s/ (%d stages)", project.display_name, len(stages))

        return report

    def link_targets(self, projects: list[Project], site_url: str) -> list[LinkTarget]:
        targets = []
        for project in projects:
            url = project.url or site_url
            if url:
                targets.append(LinkTarget(name=project.display_name, url=url))
        return targets

    def _write(self, path: Path, html: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
        logger.debug("Wrote %s", path)
        return path

    def _generation_date(self, lang: str) -> str:
        day = self.today or date.today()
        if lang == "en":
            return f"{day.month}/{day.day}/{day.year}"
        return day.strftime("%d.%m.%Y")

    def _intro(self, project: Project, lang: str) -> str:
        text = self.source.read_intro(project, lang)
        if not text and lang == LANGS[0]:
            logger.warning("No intro.md in project %s", project.name)
        return text

    def main_page(
        self,
        template: str,
        lang: str,
        projects: list[Project],
        stages_by_project: dict[str, list[StageMeta]],
        site_url: str,
    ) -> str:
        description = self._intro(projects[0], lang) if projects else ""
        toc_entries = [(p.display_name, len(stages_by_project[p.name])) for p in projects]
        values = {
            "PROJECT_NAME": self.config.site.project_name,
            "PROJECT_DESCRIPTION": markdown_to_plain(description),
            "PROJECT_URL_META": blocks.url_meta(site_url),
            "PROJECT_DESCRIPTION_BLOCK": "",
            "PROJECT_LINK_BLOCK": blocks.link_block(site_url, lang),
            "TABLE_OF_CONTENTS": blocks.main_toc(toc_entries, lang),
            "PROJECT_LINK_FOOTER": blocks.link_footer(site_url, lang),
            "STAGES_CONTENT": "",
            "GENERATION_DATE": self._generation_date(lang),
            "RU_ACTIVE": "active" if lang == "ru" else "",
            "EN_ACTIVE": "active" if lang == "en" else "",
            "RU_URL": "index.html" if lang == "ru" else "../ru/index.html",
            "EN_URL": "index.html" if lang == "en" else "../en/index.html",
            "BACK_LINK": "",
            "SUBTITLE": label(lang, "subtitle"),
        }
        return self._finish(template, lang, values)

    def stage_views(self, stages: list[StageMeta], lang: str) -> list[blocks.StageView]:
        views: list[blocks.StageView] = []
        for i, meta in enumerate(stages):
            path = resolve_localized(meta.stage_file.parent, meta.stage_file.name, lang, default=meta.stage_file)
            content = self.parser.parse_file(path)

            title = meta.title or content.title
            if path != meta.stage_file and content.title:
                title = content.title
            if not title:
                title = f"{label(lang, 'stage')} {i + 1}"

            in_sections = {
                name
                for _key, markdown in content.sections()
                for name, _alt in blocks.screenshot_refs(markdown, lang)
            }
            full_text = path.read_text(encoding="utf-8") if path.exists() else ""
            extra = [
                (name, alt)
                for name, alt in blocks.screenshot_refs(full_text, lang)
                if name not in in_sections
            ]

            views.append(blocks.StageView(
                index=i,
                date=meta.date,
                title=title,
                content=content,
                prev_title=views[-1].title if views else None,
                extra_screenshots=extra,
            ))
        return views

    def project_page(self, template: str, lang: str, project: Project, stages: list[StageMeta]) -> str:
        description = self._intro(project, lang)
        views = self.stage_views(stages, lang)
        name = project.display_name
        other = "en" if lang == "ru" else "ru"
        back = label(lang, "other_projects")

        html = replace_footer(
            template,
            f'<footer><p><a href="../index.html" style="{blocks.LINK_STYLE}">{back}</a></p></footer>',
        )
        values = {
            "PROJECT_NAME": name,
            "PROJECT_DESCRIPTION": markdown_to_plain(description),
            "PROJECT_URL_META": blocks.url_meta(project.url),
            "PROJECT_DESCRIPTION_BLOCK": blocks.description_block(description, project.name, lang),
            "PROJECT_LINK_BLOCK": blocks.link_block(project.url, lang),
            "TABLE_OF_CONTENTS": blocks.project_toc(views, lang),
            "PROJECT_LINK_FOOTER": blocks.link_footer(project.url, lang),
            "STAGES_CONTENT": "".join(blocks.stage_html(v, lang) for v in views),
            "GENERATION_DATE": "",
            "RU_ACTIVE": "active" if lang == "ru" else "",
            "EN_ACTIVE": "active" if lang == "en" else "",
            f"{lang.upper()}_URL": "index.html",
            f"{other.upper()}_URL": f"../../{other}/{name}/index.html",
            "BACK_LINK": f'<div class="back-link"><a href="../index.html">{back}</a></div>',
            "SUBTITLE": label(lang, "subtitle"),
        }
        return self._finish(html, lang, values)

    def _finish(self, template: str, lang: str, values: dict[str, str]) -> str:
        html = fill_template(set_html_lang(template, lang), values)
        if lang != "ru":
            html = localize_head(html, label("ru", "subtitle"), label(lang, "subtitle"))
        return html

    def copy_screenshots(self, project: Project, lang: str, dest: Path) -> int:
        files = self.source.screenshots(project, lang)
        if not files:
            return 0
        dest.mkdir(parents=True, exist_ok=True)
        for src in files:
            shutil.copy2(src, dest / src.name)
        return len(files)
