"""Numeric-index batch loop over an input directory."""

from pathlib import Path
from typing import Optional

import cv2
import numpy as np
from numpy.typing import NDArray

from eye_finder.config_service.config import Config
from eye_finder.eye_detection.detection_types import BatchReport
from eye_finder.errors import FaceNotFound, ImageUnreadable
from eye_finder.pipeline.image_processor import ImageProcessor
from eye_finder.ports.interfaces import IDebugViewer, IFaceLocator
from eye_finder.utilities.logger_setup import setup_logger


def read_image(path: Path) -> NDArray[np.uint8]:
    """Load a color image; raise ImageUnreadable when missing or undecodable."""
    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None or image.size == 0:
        raise ImageUnreadable(str(path))
    return image


class BatchRunner:
    """
    Processes images <start_index> .. <start_index + image_count - 1> one at a
    time and writes each annotated result under the same file name.

    Unreadable inputs are skipped. A faceless image aborts the batch unless
    batch.abort_on_missing_face is off, in which case it is skipped too.
    """

    def __init__(
        self,
        config: Config,
        face_locator: IFaceLocator,
        viewer: Optional[IDebugViewer] = None,
    ) -> None:
        self.logger = setup_logger("BatchRunner")

        self.cfg = config
        self.processor = ImageProcessor(config, face_locator, viewer=viewer)


    def input_path(self, index: int) -> Path:
        return Path(self.cfg.batch.input_dir) / f"{index}{self.cfg.batch.extension}"


    def output_path(self, index: int) -> Path:
        return Path(self.cfg.batch.output_dir) / f"{index}{self.cfg.batch.extension}"


    def indices(self) -> range:
        start = self.cfg.batch.start_index
        return range(start, start + self.cfg.batch.image_count)


    def run(self) -> BatchReport:
        """Run the whole batch. FaceModelUnavailable propagates to the caller."""
        batch = self.cfg.batch
        Path(batch.output_dir).mkdir(parents=True, exist_ok=True)

        report = BatchReport()
        self.logger.info("Processing images %d..%d from %s",
                         self.indices().start, self.indices().stop - 1, batch.input_dir)

        for index in self.indices():
            report.attempted += 1

            try:
                image = read_image(self.input_path(index))
            except ImageUnreadable as e:
                self.logger.debug("Skipping image %d: %s", index, e)
                report.unreadable.append(index)
                continue

            try:
                result = self.processor.process(image, index)
            except FaceNotFound:
                report.faceless.append(index)
                if batch.abort_on_missing_face:
                    self.logger.error("No face found in image %d, aborting batch.", index)
                    report.aborted = True
                    break
                self.logger.warning("No face found in image %d, skipping.", index)
                continue

            out_path = self.output_path(index)
            if not cv2.imwrite(str(out_path), result.annotated):
                self.logger.error("Failed to write %s", out_path)
            report.add(result)

        if self.cfg.diagnostics.timing_report:
            self.logger.info("Total time for processing: %.3f seconds.", report.total_time_s)
            self.logger.info("Average time of processing: %.3f seconds.", report.average_time_s)

        self.logger.info(
            "Batch done: %d processed, %d unreadable, %d without face%s",
            len(report.processed), len(report.unreadable), len(report.faceless),
            " (aborted)" if report.aborted else "",
        )
        return report
