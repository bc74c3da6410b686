"""Locale-specific content lookup with silent fallback to the default locale."""

from pathlib import Path

from .core.model import DEFAULT_LANG


def localized_candidates(
    base_dir: Path,
    file_name: str,
    default: Path | None = None,
    legacy: Path | None = None,
) -> list[Path]:
    """
    English lookup order for *file_name*:

    1. base_dir/en/<file>
    2. base_dir/stages/en/<file>
    3. legacy <stem>.en<suffix>, next to the default file unless given
    """
    if default is None:
        default = base_dir / file_name
    if legacy is None:
        legacy = default.with_name(f"{default.stem}.en{default.suffix}")
    return [
        base_dir / "en" / file_name,
        base_dir / "stages" / "en" / file_name,
        legacy,
    ]


def resolve_localized(
    base_dir: Path,
    file_name: str,
    lang: str,
    default: Path | None = None,
    legacy: Path | None = None,
) -> Path:
    """Pick the file to read for *lang*.

    Falls back to *default* (or ``base_dir/file_name``) when no localized
    variant exists. The returned path may itself not exist.
    """
    if default is None:
        default = base_dir / file_name
    if lang == DEFAULT_LANG:
        return default
    for candidate in localized_candidates(base_dir, file_name, default, legacy):
        if candidate.exists():
            return candidate
    return default


def read_localized(
    base_dir: Path,
    file_name: str,
    lang: str,
    default: Path | None = None,
    legacy: Path | None = None,
) -> str:
    """Read the localized text, or "" when neither variant exists."""
    path = resolve_localized(base_dir, file_name, lang, default, legacy)
    return path.read_text(encoding="utf-8").strip() if path.exists() else ""
