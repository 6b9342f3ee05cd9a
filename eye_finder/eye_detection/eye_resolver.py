"""Turns raw eye candidates into the eye set used for pupil location."""

from itertools import combinations

from eye_finder.config_service.config import Config
from eye_finder.eye_detection.detection_types import BoundingBox, EyeCandidate
from eye_finder.errors import ConfigError
from eye_finder.utilities.logger_setup import setup_logger


CORRECTION_MODES = ("always", "listed", "off")
SURPLUS_POLICIES = ("keep_all", "largest_pair", "most_symmetric")


def mirror_box(eye: BoundingBox, face: BoundingBox) -> BoundingBox:
    """Reflect an eye box across the face's vertical centerline."""
    left_offset = eye.x - face.x
    right_offset = face.right - eye.right
    if left_offset > right_offset:
        # detected eye sits on the image-right side, place the mirror on the left
        x = face.x + right_offset
    else:
        x = face.right - left_offset - eye.width
    return BoundingBox(x, eye.y, eye.width, eye.height)


class EyeSetResolver:
    """
    Applies the geometric correction and the bilateral mirroring fallback.

    Geometric correction: eyes lie in the upper half of the face, and of two
    candidates stacked on the same side the lower one is the eye (the upper is
    an eyebrow). Whether it runs for every image, only for listed image
    identifiers, or never, is set by resolution.correction_mode. A correction
    that would leave no candidate at all is not applied.
    """

    def __init__(self, config: Config) -> None:
        self.logger = setup_logger("EyeSetResolver")
        self.cfg = config.resolution

        if self.cfg.correction_mode not in CORRECTION_MODES:
            raise ConfigError(f"Unknown correction_mode '{self.cfg.correction_mode}'")
        if self.cfg.surplus_policy not in SURPLUS_POLICIES:
            raise ConfigError(f"Unknown surplus_policy '{self.cfg.surplus_policy}'")


    def resolve(
        self,
        eyes: list[EyeCandidate],
        face: BoundingBox,
        image_id: int | None = None,
    ) -> list[EyeCandidate]:
        """Return a new eye list; the input list is left untouched."""
        resolved = list(eyes)

        if self._correction_applies(image_id):
            corrected = self.correct(resolved, face)
            if resolved and not corrected:
                # correction must not empty a non-empty set
                self.logger.debug("Correction would drop all %d candidate(s), keeping them",
                                  len(resolved))
            else:
                resolved = corrected

        if len(resolved) == 1:
            resolved.append(self.mirror(resolved[0], face))
        elif len(resolved) > 2:
            resolved = self._reduce_surplus(resolved, face)

        return resolved


    def correct(self, eyes: list[EyeCandidate], face: BoundingBox) -> list[EyeCandidate]:
        """Drop lower-face candidates, then an eyebrow stacked above an eye."""
        midline = face.y + face.height / 2
        upper = [eye for eye in eyes if eye.box.y <= midline]
        if len(upper) != len(eyes):
            self.logger.debug("Dropped %d candidate(s) below the face midline",
                              len(eyes) - len(upper))

        if len(upper) == 2:
            first, second = upper
            centerline = face.x + face.width / 2
            same_side = (first.box.center[0] < centerline) == (second.box.center[0] < centerline)
            if same_side:
                lower = first if first.box.y > second.box.y else second
                self.logger.debug("Two candidates on one side, keeping the lower one at y=%d",
                                  lower.box.y)
                upper = [lower]

        return upper


    def mirror(self, eye: EyeCandidate, face: BoundingBox) -> EyeCandidate:
        """Synthesize the missing eye from the detected one."""
        box = mirror_box(eye.box, face)
        side = "left" if box.x < eye.box.x else "right"
        self.logger.debug("Single eye found, mirrored to the %s at x=%d", side, box.x)
        return EyeCandidate(box=box, contour=None, area=eye.area, mirrored=True)


    # ---------- helpers ----------

    def _correction_applies(self, image_id: int | None) -> bool:
        mode = self.cfg.correction_mode
        if mode == "always":
            return True
        if mode == "listed":
            return image_id is not None and image_id in self.cfg.correction_images
        return False


    def _reduce_surplus(self, eyes: list[EyeCandidate], face: BoundingBox) -> list[EyeCandidate]:
        policy = self.cfg.surplus_policy
        if policy == "keep_all":
            return eyes

        if policy == "largest_pair":
            keep = sorted(range(len(eyes)), key=lambda i: eyes[i].box.area, reverse=True)[:2]
        else:
            keep = min(combinations(range(len(eyes)), 2),
                       key=lambda pair: _asymmetry(eyes[pair[0]].box, eyes[pair[1]].box, face))

        self.logger.debug("Reduced %d candidates to 2 (%s)", len(eyes), policy)
        return [eyes[i] for i in sorted(keep)]


def _asymmetry(a: BoundingBox, b: BoundingBox, face: BoundingBox) -> float:
    """How far two boxes are from being mirror images across the face centerline."""
    centerline = face.x + face.width / 2
    ax, ay = a.center
    bx, by = b.center
    return abs((ax - centerline) + (bx - centerline)) + abs(ay - by)
