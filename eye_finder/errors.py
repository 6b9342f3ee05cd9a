"""Exceptions raised by the eye finder pipeline."""


class EyeFinderError(Exception):
    """Base class for all eye finder errors."""


class FaceNotFound(EyeFinderError):
    """The face locator returned no face for an image."""

    def __init__(self, index: int | None = None) -> None:
        self.index = index
        where = f" in image {index}" if index is not None else ""
        super().__init__(f"No face found{where}")


class FaceModelUnavailable(EyeFinderError):
    """The face detection model could not be loaded."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Face detection model unavailable: {path}")


class ImageUnreadable(EyeFinderError):
    """An input image is missing or cannot be decoded."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Cannot read image: {path}")


class ConfigError(EyeFinderError):
    """Unknown config path or a value that does not fit the field type."""
