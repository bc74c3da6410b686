"""HTML fragments substituted into the page template."""

import re
from dataclasses import dataclass, field

from ..core.model import StageContent
from ..render.linker import LINK_STYLE
from ..render.markdown import escape_html, process_inline, render_markdown
from .labels import label, section_title

SCREENSHOT_REF_RE = re.compile(r"!\[(.*?)\]\((.*?)\)")

BOX_STYLE = "background: #f8f9fa; padding: 20px; border-radius: 8px;"

DESCRIPTION_COLLAPSE_AT = 500


@dataclass
class StageView:
    """Everything needed to render one stage on a project page."""
    index: int
    date: str
    title: str
    content: StageContent
    prev_title: str | None = None
    extra_screenshots: list[tuple[str, str]] = field(default_factory=list)

    @property
    def anchor(self) -> str:
        return f"stage-{self.index}"


def screenshot_html(file_name: str, alt: str) -> str:
    """Image tag for a screenshot copied next to the project page."""
    escaped_alt = (alt or file_name).replace('"', "&quot;")
    html = '<div class="screenshot" style="margin: 20px 0;">'
    html += (
        f'<img src="screenshots/{file_name}" alt="{escaped_alt}" style="max-width: 100%; '
        'width: auto; height: auto; border-radius: 4px; box-shadow: 0 2px 5px rgba(0,0,0,0.1); '
        'display: block;">'
    )
    if alt:
        html += f'<div class="screenshot-caption">{escape_html(alt)}</div>'
    html += "</div>"
    return html


def screenshot_refs(markdown: str, lang: str) -> list[tuple[str, str]]:
    """(file name, alt) of every image under screenshots/<lang>/ in *markdown*."""
    marker = f"screenshots/{lang}/"
    return [
        (path.split("/")[-1], alt)
        for alt, path in SCREENSHOT_REF_RE.findall(markdown)
        if marker in path
    ]


def url_meta(url: str) -> str:
    if not url:
        return ""
    return (
        f'<link rel="canonical" href="{url}">\n'
        f'    <meta property="og:url" content="{url}">\n'
        f'    <meta name="twitter:url" content="{url}">'
    )


def link_block(url: str, lang: str) -> str:
    if not url:
        return ""
    return (
        f'<p>{label(lang, "current_impl")} '
        f'<a href="{url}" target="_blank" rel="noopener noreferrer">{url}</a></p>'
    )


def link_footer(url: str, lang: str) -> str:
    if not url:
        return ""
    return (
        f'<p style="margin-top: 20px;">{label(lang, "working_version")} '
        f'<a href="{url}" target="_blank" rel="noopener noreferrer">{url}</a></p>'
    )


def main_toc(projects: list[tuple[str, int]], lang: str) -> str:
    """Project list for the main page: (display name, stage count) pairs."""
    if not projects:
        return ""
    toc = f'<div class="stage-section" style="{BOX_STYLE} margin-top: 40px;">'
    toc += f'<h3 style="margin-top: 0;">{label(lang, "projects")}</h3>'
    toc += '<ul style="list-style: none; padding-left: 0;">'
    for name, count in projects:
        toc += '<li style="margin-bottom: 15px;">'
        toc += (
            f'<a href="{name}/" style="color: #2c3e50; text-decoration: none; font-size: 1.2em; '
            f'font-weight: bold; border-bottom: 2px solid #3498db; padding-bottom: 5px;">{name}</a>'
        )
        toc += f' <span style="color: #95a5a6; font-size: 0.9em;">({count} {label(lang, "stages")})</span>'
        toc += "</li>"
    toc += "</ul></div>"
    return toc


def _short_description(description: str, html: str) -> str:
    text = re.sub(r"[#*\[\]()]", "", description).strip()
    short_text = text[:DESCRIPTION_COLLAPSE_AT]
    last_space = short_text.rfind(" ")
    cutoff = last_space if last_space > 400 else DESCRIPTION_COLLAPSE_AT

    if len(html) <= cutoff * 2:
        return html
    html_cutoff = int(min(cutoff * 2, len(html) * 0.6))
    last_p = html.rfind("</p>", 0, html_cutoff + len("</p>"))
    if last_p > 0:
        return html[: last_p + len("</p>")]
    return html[:html_cutoff] + "..."


def _toggle_link(hide_id: str, show_id: str, text: str) -> str:
    return (
        f" <a href=\"#\" onclick=\"document.getElementById('{hide_id}').style.display='none'; "
        f"document.getElementById('{show_id}').style.display='block'; return false;\" "
        f'style="{LINK_STYLE}">{text}</a>'
    )


def description_block(description: str, project_name: str, lang: str) -> str:
    """
    "About the project" box. Descriptions longer than 500 characters of
    plain text get a short version with read-more / collapse toggles.
    """
    if not description:
        return ""
    html = render_markdown(description)
    plain = re.sub(r"[#*\[\]()]", "", description).strip()

    block = f'<div class="stage-section" style="{BOX_STYLE} margin-bottom: 40px;">'
    block += f'<h3 style="margin-top: 0;">{label(lang, "about")}</h3>'
    if len(plain) > DESCRIPTION_COLLAPSE_AT:
        uid = "project-description-" + re.sub(r"[^a-zA-Z0-9]", "-", project_name)
        short_id, full_id = f"{uid}-short", f"{uid}-full"
        block += f'<div id="{short_id}" style="display: block;">'
        block += _short_description(description, html)
        block += _toggle_link(short_id, full_id, label(lang, "read_more"))
        block += "</div>"
        block += f'<div id="{full_id}" style="display: none;">'
        block += html
        block += _toggle_link(full_id, short_id, label(lang, "collapse"))
        block += "</div>"
    else:
        block += html
    block += "</div>"
    return block


def project_toc(stages: list[StageView], lang: str) -> str:
    if len(stages) <= 1:
        return ""
    toc = f'<div class="stage-section" style="{BOX_STYLE} margin-top: 40px;">'
    toc += f'<h3 style="margin-top: 0;">{label(lang, "toc")}</h3>'
    toc += '<ul style="list-style: none; padding-left: 0;">'
    for stage in stages:
        toc += '<li style="margin-bottom: 10px;">'
        toc += (
            f'<a href="#{stage.anchor}" style="color: #2c3e50; text-decoration: none; '
            f'border-bottom: 1px solid #3498db; padding-bottom: 2px;">{escape_html(stage.title)}</a>'
        )
        toc += "</li>"
    toc += "</ul></div>"
    return toc


def _section(lang: str, key: str, markdown: str) -> str:
    if not markdown:
        return ""
    html = '<div class="stage-section">'
    html += f"<h3>{section_title(lang, key)}</h3>"
    html += render_markdown(markdown, screenshot_html)
    html += "</div>"
    return html


def stage_html(stage: StageView, lang: str) -> str:
    html = f'<div class="stage" id="{stage.anchor}">'
    html += '<div class="stage-header">'
    html += f'<div class="stage-date">{escape_html(stage.date)}</div>'
    if stage.prev_title is not None:
        html += (
            f'<div style="margin-bottom: 10px; font-size: 0.9em;">'
            f'<a href="#stage-{stage.index - 1}" style="{LINK_STYLE}">'
            f'{label(lang, "previous_stage")} {escape_html(stage.prev_title)}</a></div>'
        )
    html += f'<h2 class="stage-title">{escape_html(stage.title)}</h2>'
    html += "</div>"

    for key, markdown in stage.content.sections():
        html += _section(lang, key, markdown)

    if stage.content.what_done:
        html += '<div class="stage-section">'
        html += f'<h3>{label(lang, "what_done")}</h3>'
        html += '<ul class="what-done-list">'
        for item in stage.content.what_done:
            html += f"<li>{process_inline(item)}</li>"
        html += "</ul></div>"

    if stage.extra_screenshots:
        html += '<div class="stage-section"><div class="screenshots">'
        for file_name, alt in stage.extra_screenshots:
            html += screenshot_html(file_name, alt)
        html += "</div></div>"

    html += "</div>"
    return html
