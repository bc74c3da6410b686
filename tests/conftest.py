"""Shared fixtures: a small diary input tree."""

import json
import tempfile
from pathlib import Path

import pytest

STAGE_ONE_RU = """# Первый этап

![overview](../screenshots/ru/overview.png)

## Что было
Нужно было плеер.

## Решение
- Взяли **Web Audio**
- Добавили кэш
![player](../screenshots/ru/player.png)

## Что сделано
- Плеер
- Кэш
"""

STAGE_ONE_EN = """# First stage

## What was needed
A player was needed.
"""

STAGE_TWO_RU = """# Второй этап

## Плюсы
Быстро.
"""


def make_diary(root: Path) -> Path:
    """Write an input tree under *root* and return the input directory."""
    input_dir = root / "input"
    project = input_dir / "lofi_log"
    stages = project / "stages"
    (stages / "en").mkdir(parents=True)
    (project / "screenshots" / "ru").mkdir(parents=True)

    (project / "intro.md").write_text("Lofi is a **radio** app.\n", encoding="utf-8")
    (project / "project-url.txt").write_text("https://lofi.example\n", encoding="utf-8")
    (stages / "stages-index.json").write_text(json.dumps([
        {"file": "stage-02.md", "date": "2025-02-01", "title": "Второй этап"},
        {"file": "stage-01.md", "date": "2025-01-10", "title": "Первый этап"},
        {"file": "missing.md", "date": "2025-03-01", "title": "Нет"},
    ], ensure_ascii=False), encoding="utf-8")
    (stages / "stage-01.md").write_text(STAGE_ONE_RU, encoding="utf-8")
    (stages / "en" / "stage-01.md").write_text(STAGE_ONE_EN, encoding="utf-8")
    (stages / "stage-02.md").write_text(STAGE_TWO_RU, encoding="utf-8")

    shots = project / "screenshots" / "ru"
    (shots / "overview.png").write_bytes(b"\x89PNG overview")
    (shots / "player.png").write_bytes(b"\x89PNG player")
    (shots / "notes.txt").write_text("not an image", encoding="utf-8")

    # A project without stages and a directory that is not a project
    (input_dir / "empty_log").mkdir()
    (input_dir / "assets").mkdir()

    return input_dir


@pytest.fixture
def diary_root():
    """Temporary directory holding input/ with one populated project."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        make_diary(root)
        yield root
