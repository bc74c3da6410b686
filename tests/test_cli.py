"""Tests for the diary CLI commands."""

import json
import subprocess
import tempfile
from pathlib import Path


def _diary(root, *args):
    return subprocess.run(
        ["diary", "--root", str(root), *args],
        capture_output=True,
        text=True,
        cwd=root,
    )


def test_build_command(diary_root):
    """diary build writes the site and prints a summary."""
    result = _diary(diary_root, "build")

    assert result.returncode == 0
    assert "Projects: 1" in result.stdout
    assert "Stages: 2" in result.stdout
    assert (diary_root / "public" / "ru" / "lofi" / "index.html").exists()


def test_build_command_with_config(diary_root):
    """Paths and site name come from diary.toml next to the diary."""
    (diary_root / "diary.toml").write_text("""
[site]
project_name = "Weekend Hacks"

[paths]
output = "site"
""")
    result = _diary(diary_root, "-q", "build")

    assert result.returncode == 0
    assert result.stdout == ""
    html = (diary_root / "site" / "ru" / "index.html").read_text(encoding="utf-8")
    assert "<h1>Weekend Hacks</h1>" in html


def test_projects_json(diary_root):
    """diary projects --json lists every project with its stage count."""
    result = _diary(diary_root, "projects", "--json")

    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert [(p["name"], p["stages"]) for p in data] == [("empty", 0), ("lofi", 2)]


def test_render_command(diary_root):
    """diary render prints the HTML of one file, localized when asked."""
    stage = diary_root / "input" / "lofi_log" / "stages" / "stage-01.md"

    result = _diary(diary_root, "render", str(stage), "--lang", "en")
    assert result.returncode == 0
    assert "<h1>First stage</h1>" in result.stdout

    result = _diary(diary_root, "render", str(stage))
    assert "<h1>Первый этап</h1>" in result.stdout
    assert "<img" not in result.stdout

    result = _diary(diary_root, "render", str(stage), "--screenshots")
    assert 'src="screenshots/overview.png"' in result.stdout


def test_render_missing_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = _diary(Path(tmpdir), "render", "nope.md")
        assert result.returncode == 1
        assert "not found" in result.stderr


def test_invalid_config_reports_error():
    """Configuration errors are printed and exit with status 1."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "diary.toml").write_text("[links]\nanchor_window = 0\n")
        result = _diary(root, "build")
        assert result.returncode == 1
        assert result.stderr.startswith("Error:")
