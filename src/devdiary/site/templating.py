"""Page template loading and {{PLACEHOLDER}} substitution."""

import re
from importlib import resources
from pathlib import Path

from ..errors import TemplateNotFoundError

PLACEHOLDER_RE = re.compile(r"\{\{([A-Z_]+)\}\}")
FOOTER_RE = re.compile(r"<footer>[\s\S]*?</footer>")
HTML_LANG_RE = re.compile(r'<html lang="ru">')

DEFAULT_TEMPLATE = "diary-template.html"


def load_template(path: Path | None = None) -> str:
    """Read the page template; the packaged default is used when *path* is None."""
    if path is None:
        return resources.files("devdiary.templates").joinpath(DEFAULT_TEMPLATE).read_text(encoding="utf-8")
    if not path.exists():
        raise TemplateNotFoundError(path)
    return path.read_text(encoding="utf-8")


def fill_template(template: str, values: dict[str, str]) -> str:
    """Replace every ``{{KEY}}`` present in *values*; unknown keys stay as written."""

    def sub(m: re.Match[str]) -> str:
        key = m.group(1)
        return values[key] if key in values else m.group(0)

    return PLACEHOLDER_RE.sub(sub, template)


def set_html_lang(template: str, lang: str) -> str:
    return HTML_LANG_RE.sub(f'<html lang="{lang}">', template)


def replace_footer(template: str, footer_html: str) -> str:
    return FOOTER_RE.sub(lambda _m: footer_html, template)


def localize_head(template: str, subtitle_ru: str, subtitle_en: str) -> str:
    """Swap the Russian subtitle in <title> and keyword meta for the English one."""
    template = re.sub(
        rf"<title>([^<]+) - {re.escape(subtitle_ru)}</title>",
        lambda m: f"<title>{m.group(1)} - {subtitle_en}</title>",
        template,
    )
    return re.sub(
        r'content="([^"]*), разработка, дневник разработки',
        lambda m: f'content="{m.group(1)}, development, development diary',
        template,
    )
