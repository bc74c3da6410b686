"""Runtime wiring helper for CLI applications."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.fs_projects import FsProjects
from .adapters.stage_parser import StageParser
from .adapters.yaml_codec import YamlFrontmatter
from .config import DiaryConfig, load_config
from .site.builder import SiteBuilder


@dataclass
class Runtime:
    """Container for all wired components."""
    config: DiaryConfig
    projects: FsProjects
    builder: SiteBuilder


def build_runtime(
    root: Path | None = None,
    config_path: Path | None = None,
    input_dir: Path | None = None,
    output_dir: Path | None = None,
) -> Runtime:
    """Build and wire all components for a diary."""
    config = load_config(config_path=config_path, root=root)

    # CLI arguments win over config values
    if input_dir is not None:
        config.paths.input = input_dir
    if output_dir is not None:
        config.paths.output = output_dir

    parser = StageParser(YamlFrontmatter())
    projects = FsProjects(config.paths.input, parser=parser, default_url=config.site.project_url)
    builder = SiteBuilder(config, source=projects)

    return Runtime(
        config=config,
        projects=projects,
        builder=builder,
    )
