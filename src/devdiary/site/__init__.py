"""Static site assembly for the development diary."""

from .builder import BuildReport, SiteBuilder
from .templating import fill_template, load_template

__all__ = [
    "BuildReport",
    "SiteBuilder",
    "fill_template",
    "load_template",
]
