"""Command-line entry point for batch eye and pupil localization."""

import argparse
import logging
import sys

from eye_finder.config_service.config import Config
from eye_finder.errors import ConfigError, FaceModelUnavailable
from eye_finder.eye_detection.face_locator import FaceLocator
from eye_finder.pipeline.batch_runner import BatchRunner
from eye_finder.utilities.debug_viewer import CvDebugViewer
from eye_finder.utilities.logger_setup import set_level, setup_logger

EXIT_OK = 0
EXIT_ABORTED = 1
EXIT_USAGE = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="eye-finder",
        description="Locate eyes and pupils in a numbered batch of face images.",
    )
    parser.add_argument("-i", "--input-dir", type=str, default=None,
                        help="Directory holding <index><extension> images.")
    parser.add_argument("-o", "--output-dir", type=str, default=None,
                        help="Directory for the annotated images.")
    parser.add_argument("-s", "--start", type=int, default=None,
                        help="First image index (default 0).")
    parser.add_argument("-n", "--count", type=int, default=None,
                        help="Number of images to process (default 18).")
    parser.add_argument("-e", "--extension", type=str, default=None,
                        help="Image file extension (default .jpg).")
    parser.add_argument("-m", "--model", type=str, default=None,
                        help="Haar cascade file for face detection.")
    parser.add_argument("-c", "--config", type=str, default=None,
                        help="JSON file with config overrides.")
    parser.add_argument("--set", dest="overrides", action="append", default=[],
                        metavar="SECTION.KEY=VALUE",
                        help="Override one config value; may be repeated.")
    parser.add_argument("-d", "--debug", action="store_true",
                        help="Show intermediate images, one key press per image.")
    parser.add_argument("--timing", dest="timing", action="store_true", default=None,
                        help="Report total and average processing time.")
    parser.add_argument("--no-timing", dest="timing", action="store_false", default=None,
                        help="Do not report processing time.")
    parser.add_argument("--skip-missing-faces", action="store_true",
                        help="Skip images without a face instead of aborting the batch.")
    parser.add_argument("--log-level", type=str, default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level.")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """Defaults, then the JSON file, then --set values, then dedicated flags."""
    config = Config()

    if args.config:
        config.load_json(args.config)

    for override in args.overrides:
        if "=" not in override:
            raise ConfigError(f"expected SECTION.KEY=VALUE, got '{override}'")
        path, value = override.split("=", 1)
        config.set(path.strip(), value.strip())

    flags = {
        "batch.input_dir": args.input_dir,
        "batch.output_dir": args.output_dir,
        "batch.start_index": args.start,
        "batch.image_count": args.count,
        "batch.extension": args.extension,
        "face.model_path": args.model,
        "diagnostics.timing_report": args.timing,
    }
    for path, value in flags.items():
        if value is not None:
            config.set(path, value)

    if args.debug:
        config.set("diagnostics.debug_visualization", True)
    if args.skip_missing_faces:
        config.set("batch.abort_on_missing_face", False)

    return config


def main(argv: list[str] | None = None) -> int:
    """Run one batch; returns the process exit code."""
    args = parse_args(argv)
    logger = setup_logger("Core")
    set_level(getattr(logging, args.log_level))

    try:
        config = build_config(args)
        viewer = CvDebugViewer() if config.diagnostics.debug_visualization else None
        face_locator = FaceLocator(config.face.model_path)
        runner = BatchRunner(config, face_locator, viewer=viewer)
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return EXIT_USAGE

    try:
        report = runner.run()
    except FaceModelUnavailable as e:
        logger.error("%s", e)
        return EXIT_ABORTED

    if report.aborted:
        logger.error("No face found, batch stopped at image %d.", report.faceless[-1])
        return EXIT_ABORTED
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
