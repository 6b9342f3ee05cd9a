"""Runs the full face, eye and pupil pipeline on one image."""

import time
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from eye_finder.config_service.config import Config
from eye_finder.eye_detection.detection_types import ImageResult
from eye_finder.eye_detection.eye_candidates import EyeCandidateDetector
from eye_finder.eye_detection.eye_resolver import EyeSetResolver
from eye_finder.eye_detection.face_locator import prepare_face_region
from eye_finder.eye_detection.pupil_locator import PupilLocator
from eye_finder.ports.interfaces import IDebugViewer, IFaceLocator
from eye_finder.utilities import eye_data_drawer
from eye_finder.utilities.logger_setup import setup_logger


class ImageProcessor:
    """
    Face location, eye detection, eye set resolution, pupil location and
    rendering, strictly in that order. Detection always reads the untouched
    input; overlays go onto a copy.
    """

    def __init__(
        self,
        config: Config,
        face_locator: IFaceLocator,
        viewer: Optional[IDebugViewer] = None,
    ) -> None:
        self.logger = setup_logger("ImageProcessor")

        self.cfg = config
        self.face_locator = face_locator
        self.viewer = viewer

        self.eye_detector = EyeCandidateDetector(config)
        self.resolver = EyeSetResolver(config)
        self.pupil_locator = PupilLocator(config, viewer=viewer)


    def process(
        self,
        image: NDArray[np.uint8],
        index: Optional[int] = None,
    ) -> ImageResult:
        """
        Arguments:
            image: BGR (or grayscale) input image.
            index: image identifier, used by the listed correction mode and in logs.

        Raises:
            FaceNotFound: the face locator found no face.
            FaceModelUnavailable: the face model could not be loaded.
        """
        start = time.perf_counter()

        face = self.face_locator.primary_face(image, index)

        gray, mask = prepare_face_region(image, face, self.cfg)
        candidates = self.eye_detector.detect(gray, mask, face)
        eyes = self.resolver.resolve(candidates, face, index)
        pupils = self.pupil_locator.locate_all(image, eyes)

        radius = eye_data_drawer.normalize_radius(
            pupils,
            min_radius=self.cfg.render.min_radius,
            scale=self.cfg.render.radius_scale,
        )
        annotated = eye_data_drawer.draw(image.copy(), face, eyes, pupils, radius, self.cfg)

        duration = time.perf_counter() - start

        if self.viewer is not None:
            self.viewer.show("face_threshold", mask)
            self.viewer.show("eye_contours", eye_data_drawer.draw_contours(gray, candidates))
            self.viewer.show("result", annotated)
            self.viewer.wait()

        self.logger.info(
            "Image %s: face %s, %d candidate(s), %d eye(s), %d pupil(s), radius %s (%.3fs)",
            index, face.as_tuple(), len(candidates), len(eyes), len(pupils), radius, duration,
        )

        return ImageResult(
            face=face,
            eyes=eyes,
            pupils=pupils,
            display_radius=radius,
            annotated=annotated,
            duration_s=duration,
            index=index,
        )
