"""Configuration loader for diary.toml."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

from .errors import ConfigError

CONFIG_FILE = "diary.toml"
LEGACY_CONFIG_FILE = "config.json"


@dataclass
class SiteConfig:
    """Site identity."""
    project_name: str = "Dev Diary"
    project_url: str = ""


@dataclass
class PathsConfig:
    """Input, output and template locations."""
    input: Path
    output: Path
    template: Path | None = None


@dataclass
class LinksConfig:
    """Project-name auto-linking."""
    anchor_window: int = 10
    project_pages: bool = False


@dataclass
class DiaryConfig:
    """Complete devdiary configuration."""
    site: SiteConfig
    paths: PathsConfig
    links: LinksConfig
    source: Path | None = None


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid {path}: {e}") from e


def _load_legacy_json(path: Path) -> dict[str, Any]:
    """Map the old config.json keys onto the diary.toml layout."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {path}: expected an object")
    site = {}
    if "projectName" in data:
        site["project_name"] = data["projectName"]
    if "projectUrl" in data:
        site["project_url"] = data["projectUrl"]
    return {"site": site}


def _resolve(base: Path, value: str | Path) -> Path:
    p = Path(value)
    return p if p.is_absolute() else base / p


def load_config(config_path: Path | None = None, root: Path | None = None) -> DiaryConfig:
    """
    Load configuration from diary.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/diary.toml
    3. root/diary.toml
    4. root/config.json (legacy keys projectName, projectUrl)

    Relative paths are resolved against the directory of the file that
    was found, or against root (default: cwd) when none was.

    Args:
        config_path: Explicit path to config file
        root: Diary root directory for fallback search

    Returns:
        DiaryConfig with resolved settings
    """
    if config_path is not None and not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    data: dict[str, Any] = {}
    source = None

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_FILE)
    if root:
        search_paths.append(root / CONFIG_FILE)
        search_paths.append(root / LEGACY_CONFIG_FILE)

    for path in search_paths:
        if path.exists():
            data = _load_legacy_json(path) if path.suffix == ".json" else _load_toml(path)
            source = path
            break

    base = source.parent if source else (root or Path.cwd())

    # Parse site config
    site_data = data.get("site", {})
    site_config = SiteConfig(
        project_name=str(site_data.get("project_name", "Dev Diary")),
        project_url=str(site_data.get("project_url", "")).strip(),
    )

    # Parse paths config
    paths_data = data.get("paths", {})
    template = paths_data.get("template")
    paths_config = PathsConfig(
        input=_resolve(base, paths_data.get("input", "input")),
        output=_resolve(base, paths_data.get("output", "public")),
        template=_resolve(base, template) if template else None,
    )

    # Parse links config
    links_data = data.get("links", {})
    window = links_data.get("anchor_window", 10)
    if not isinstance(window, int) or isinstance(window, bool) or window < 1:
        raise ConfigError(f"links.anchor_window must be a positive integer, got {window!r}")
    links_config = LinksConfig(
        anchor_window=window,
        project_pages=bool(links_data.get("project_pages", False)),
    )

    return DiaryConfig(
        site=site_config,
        paths=paths_config,
        links=links_config,
        source=source,
    )
