"""Exceptions raised by the site builder and configuration loader."""


class DiaryError(Exception):
    """Base class for devdiary errors."""


class ConfigError(DiaryError):
    """Configuration file is present but unusable."""


class TemplateNotFoundError(DiaryError):
    """The page template could not be located."""

    def __init__(self, path):
        super().__init__(f"Template not found: {path}")
        self.path = path
