"""FastAPI application for previewing a built diary locally."""

from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from .. import __version__
from ..core.model import LANGS
from ..errors import DiaryError
from ..render.markdown import render_markdown
from ..site.blocks import screenshot_html


class RenderRequest(BaseModel):
    markdown: str
    screenshots: bool = False


def create_app(runtime: Any, enable_cors: bool = False) -> FastAPI:
    """
    Create FastAPI application with runtime injected.

    The output directory is mounted at ``/`` so the generated pages can be
    browsed; JSON endpoints live under ``/api``.

    Args:
        runtime: Runtime instance with config, projects and builder
        enable_cors: Enable CORS middleware

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="devdiary preview",
        description="Local preview server for a development diary",
        version=__version__,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/projects")
    async def list_projects() -> list[dict[str, Any]]:
        """Projects with their stages."""
        result = []
        for project in runtime.projects.find_projects():
            stages = runtime.projects.load_stages(project)
            result.append({
                "name": project.display_name,
                "url": project.url,
                "stages": [
                    {"date": s.date, "title": s.title, "file": s.stage_file.name}
                    for s in stages
                ],
            })
        return result

    @app.get("/api/projects/{name}/intro")
    async def project_intro(name: str, lang: str = "ru") -> dict[str, Any]:
        """Rendered project description for one locale."""
        if lang not in LANGS:
            raise HTTPException(status_code=400, detail=f"Unknown language {lang}")
        for project in runtime.projects.find_projects():
            if project.display_name == name:
                text = runtime.projects.read_intro(project, lang)
                return {"name": name, "lang": lang, "html": render_markdown(text)}
        raise HTTPException(status_code=404, detail=f"Project {name} not found")

    @app.post("/api/render")
    async def render(req: RenderRequest) -> dict[str, Any]:
        """Render a Markdown block the way project pages do."""
        handler = screenshot_html if req.screenshots else None
        return {"html": render_markdown(req.markdown, handler)}

    @app.post("/api/build")
    async def build() -> dict[str, Any]:
        """Rebuild the site."""
        try:
            report = runtime.builder.build()
        except DiaryError as e:
            raise HTTPException(status_code=500, detail=str(e)) from e
        return {
            "pages": len(report.pages),
            "projects": report.projects,
            "stages": report.stages,
            "screenshots": report.screenshots,
        }

    out = runtime.config.paths.output
    out.mkdir(parents=True, exist_ok=True)
    app.mount("/", StaticFiles(directory=str(out), html=True), name="site")

    return app
