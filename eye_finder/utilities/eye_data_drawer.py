"""Module for drawing face, eye and pupil marks on images."""

from typing import Optional, Sequence

import numpy as np
import cv2

from eye_finder.config_service.config import Config
from eye_finder.eye_detection.detection_types import BoundingBox, EyeCandidate, PupilCandidate
from eye_finder.utilities.logger_setup import setup_logger

logger = setup_logger("EyeDataDrawer")


def tuple_int(point: Sequence[float]) -> tuple[int, ...]:
    """Round a float point to integer pixel coordinates."""
    return tuple(int(round(v)) for v in point)


def normalize_radius(
    pupils: Sequence[PupilCandidate],
    min_radius: int = 5,
    scale: int = 3,
) -> Optional[int]:
    """
    One display radius for every pupil of an image.

    The largest radius wins so both drawn pupils look alike; a maximum below
    min_radius comes from a nearly closed eye and is scaled up to stay visible.
    """
    if not pupils:
        return None
    radius = int(max(p.radius for p in pupils))
    if radius < min_radius:
        radius *= scale
    return radius


def draw(
    image: np.ndarray,
    face: BoundingBox,
    eyes: Sequence[EyeCandidate],
    pupils: Sequence[PupilCandidate],
    radius: Optional[int],
    config: Config,
) -> np.ndarray:
    """Draw the face box, the eye boxes and the pupil circles in place."""
    cfg = config.render

    cv2.rectangle(image, (face.x, face.y), (face.right - 1, face.bottom - 1),
                  cfg.face_color, cfg.face_thickness)

    for eye in eyes:
        cv2.rectangle(image, (eye.box.x, eye.box.y), (eye.box.right - 1, eye.box.bottom - 1),
                      cfg.eye_color, cfg.eye_thickness)

    if radius is not None:
        for pupil in pupils:
            # drawn on the eye's view, so the circle is clipped to the eye box
            eye_zone = eyes[pupil.eye_index].box.crop(image)
            cv2.circle(eye_zone, tuple_int(pupil.center), radius,
                       cfg.pupil_color, cfg.pupil_thickness)

    logger.debug("Drew %d eye(s) and %d pupil(s), radius %s", len(eyes), len(pupils), radius)
    return image


def draw_contours(
    region: np.ndarray,
    eyes: Sequence[EyeCandidate],
    color: tuple[int, int, int] = (0, 255, 0),
) -> np.ndarray:
    """Debug view: accepted eye contours on a copy of the face crop."""
    canvas = region.copy()
    if canvas.ndim == 2:
        canvas = cv2.cvtColor(canvas, cv2.COLOR_GRAY2BGR)
    contours = [eye.contour for eye in eyes if eye.contour is not None]
    if contours:
        cv2.drawContours(canvas, contours, -1, color, 2)
    return canvas
