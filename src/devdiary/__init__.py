"""devdiary - multi-project development diary site generator."""

__version__ = "0.3.0"
