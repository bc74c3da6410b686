"""CLI for devdiary - a multi-project development diary site generator."""

import argparse
import json
import logging
import platform
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .locales import resolve_localized
from .render.markdown import render_markdown
from .runtime import build_runtime
from .site.blocks import screenshot_html


def cmd_build(args: argparse.Namespace, rt: Any) -> int:
    """Build the site."""
    report = rt.builder.build()

    if not args.quiet:
        print(f"Site written to {rt.config.paths.output}")
        print(f"Projects: {report.projects}")
        print(f"Stages: {report.stages}")
        print(f"Pages: {len(report.pages)}")
        print(f"Screenshots: {report.screenshots}")

    return 0


def cmd_projects(args: argparse.Namespace, rt: Any) -> int:
    """List projects found in the input directory."""
    rows = []
    for project in rt.projects.find_projects():
        stages = rt.projects.load_stages(project)
        rows.append({
            "name": project.display_name,
            "dir": str(project.dir),
            "url": project.url,
            "stages": len(stages),
        })

    if args.json:
        print(json.dumps(rows, indent=2, ensure_ascii=False))
    else:
        for row in rows:
            print(f"{row['name']}\t{row['stages']}\t{row['url']}")

    return 0


def cmd_render(args: argparse.Namespace, rt: Any) -> int:
    """Render one Markdown file to HTML on stdout."""
    path = Path(args.file)
    if not path.exists():
        print(f"File {path} not found", file=sys.stderr)
        return 1

    path = resolve_localized(path.parent, path.name, args.lang, default=path)
    handler = screenshot_html if args.screenshots else None
    print(render_markdown(path.read_text(encoding="utf-8"), handler, newline="\n"), end="")
    return 0


def cmd_watch(args: argparse.Namespace, rt: Any) -> int:
    """Rebuild the site whenever sources change."""
    from .watch import watch_diary

    return watch_diary(rt, debounce_ms=args.debounce_ms, quiet=args.quiet)


def cmd_serve(args: argparse.Namespace, rt: Any) -> int:
    """Start local preview server."""
    import uvicorn

    from .api.app import create_app

    if not args.no_build:
        rt.builder.build()

    app = create_app(rt, enable_cors=args.cors)

    print(f"Serving {rt.config.paths.output} on http://{args.host}:{args.port}/ru/")
    uvicorn.run(app, host=args.host, port=args.port, log_level="warning")
    return 0


def _version_text() -> str:
    return "\n".join([
        f"devdiary {__version__}",
        f"python {platform.python_version()}",
        f"platform {platform.platform()}",
    ])


def _setup_logging(quiet: bool, verbose: bool) -> None:
    level = logging.INFO
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="diary", description="Development diary site generator"
    )
    parser.add_argument(
        "--version", action="version", version=_version_text()
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/diary.toml, root/diary.toml)",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Diary root directory (default: cwd)",
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Directory holding <name>_log project folders (overrides config)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output directory (overrides config)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # build command
    subparsers.add_parser("build", help="Build the site")

    # projects command
    parser_projects = subparsers.add_parser("projects", help="List projects")
    parser_projects.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )

    # render command
    parser_render = subparsers.add_parser("render", help="Render a Markdown file to HTML")
    parser_render.add_argument("file", help="Markdown file")
    parser_render.add_argument(
        "--lang", choices=["ru", "en"], default="ru",
        help="Locale to resolve the file for (default: ru)"
    )
    parser_render.add_argument(
        "--screenshots", action="store_true",
        help="Render screenshots/<lang>/ images instead of dropping them"
    )

    # watch command
    parser_watch = subparsers.add_parser("watch", help="Rebuild on changes")
    parser_watch.add_argument(
        "--debounce-ms", type=int, default=300,
        help="Debounce window in milliseconds (default: 300)"
    )

    # serve command
    parser_serve = subparsers.add_parser("serve", help="Start local preview server")
    parser_serve.add_argument(
        "--host", default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)"
    )
    parser_serve.add_argument(
        "--port", type=int, default=8765,
        help="Port to bind to (default: 8765)"
    )
    parser_serve.add_argument(
        "--cors", action="store_true",
        help="Enable CORS (default: false)"
    )
    parser_serve.add_argument(
        "--no-build", action="store_true",
        help="Serve the existing output without building first"
    )

    args = parser.parse_args()
    _setup_logging(args.quiet, args.verbose)

    handlers = {
        "build": cmd_build,
        "projects": cmd_projects,
        "render": cmd_render,
        "watch": cmd_watch,
        "serve": cmd_serve,
    }
    handler = handlers.get(args.cmd)
    if handler is None:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)

    try:
        rt = build_runtime(
            root=args.root,
            config_path=args.config,
            input_dir=args.input,
            output_dir=args.output,
        )
        exit_code = handler(args, rt)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
