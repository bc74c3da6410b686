from typing import Protocol


class ImageHandler(Protocol):
    """
    Turns a screenshot reference into HTML. Returning None or "" drops the image.
    """

    def __call__(self, file_name: str, alt: str) -> str | None:
        pass
