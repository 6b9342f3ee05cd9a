"""Datatypes for the eye_detection module."""

from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned integer box in full-image coordinates."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"BoundingBox needs a positive size, got {self.width}x{self.height}"
            )

    @classmethod
    def from_rect(cls, rect: Sequence[int]) -> "BoundingBox":
        """Build from an OpenCV (x, y, w, h) rect."""
        x, y, w, h = rect
        return cls(int(x), int(y), int(w), int(h))

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def offset(self, dx: int, dy: int) -> "BoundingBox":
        """Shift a region-relative box into the parent frame."""
        return BoundingBox(self.x + dx, self.y + dy, self.width, self.height)

    def contains(self, other: "BoundingBox") -> bool:
        return (
            self.x <= other.x and self.y <= other.y
            and other.right <= self.right and other.bottom <= self.bottom
        )

    def crop(self, image: NDArray[np.uint8]) -> NDArray[np.uint8]:
        """View of the image under this box (clipped at the image border)."""
        return image[self.y:self.bottom, self.x:self.right]

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)


@dataclass
class EyeCandidate:
    """Eye region and the contour it was derived from."""

    box: BoundingBox
    contour: Optional[NDArray[np.int32]] = None  # None for a mirrored eye
    area: float = 0.0  # Contour area at detection time
    mirrored: bool = False

    @property
    def aspect_ratio(self) -> float:
        return self.box.width / self.box.height

    @property
    def ellipse_ratio(self) -> float:
        """Contour area over the area of the ellipse inscribed in the box."""
        ellipse_area = np.pi * (self.box.width / 2) * (self.box.height / 2)
        return self.area / ellipse_area


@dataclass
class PupilCandidate:
    """Pupil circle relative to the eye box it was found in."""

    center: tuple[float, float]
    radius: float
    eye_index: int

    def absolute_center(self, eyes: Sequence[EyeCandidate]) -> tuple[float, float]:
        """Center in full-image coordinates."""
        box = eyes[self.eye_index].box
        return (box.x + self.center[0], box.y + self.center[1])


@dataclass
class ImageResult:
    """Outcome of running the pipeline on one image."""

    face: BoundingBox
    eyes: list[EyeCandidate]
    pupils: list[PupilCandidate]
    display_radius: Optional[int]
    annotated: NDArray[np.uint8]
    duration_s: float = 0.0
    index: Optional[int] = None


@dataclass
class BatchReport:
    """Aggregate over one batch run."""

    attempted: int = 0
    processed: list[int] = field(default_factory=list)
    unreadable: list[int] = field(default_factory=list)
    faceless: list[int] = field(default_factory=list)
    total_time_s: float = 0.0
    aborted: bool = False

    @property
    def average_time_s(self) -> float:
        """Average over every attempted index."""
        if self.attempted == 0:
            return 0.0
        return self.total_time_s / self.attempted

    def add(self, result: ImageResult) -> None:
        if result.index is not None:
            self.processed.append(result.index)
        self.total_time_s += result.duration_s
