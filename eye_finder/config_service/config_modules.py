"""Config module dataclasses."""

from dataclasses import dataclass, field


@dataclass
class Face:
    """Face locator and face-region preparation settings."""

    model_path: str = "haarcascade_frontalface_alt.xml"  # Haar cascade file
    blur_kernel: int = 3  # Gaussian kernel size (square, odd)
    blur_sigma: float = 2.0  # Gaussian standard deviation in x and y
    binary_threshold: int = 80  # Inverted threshold, darker pixels become foreground


@dataclass
class EyeDetection:
    """Eye candidate detector settings."""

    start_area: float = 1000  # First relative-area threshold
    area_step: float = 50  # Threshold decrease per pass
    min_aspect_ratio: float = 1.3  # width / height, eyes are wider than tall
    # Allowed deviation of contour area from the bounding-box ellipse area
    max_ellipse_deviation: float = 0.6
    face_width_divisor: int = 3  # Eye width must not exceed face width // divisor
    bright_intensity: int = 180  # Pixels above this count as sclera highlight
    min_bright_fraction: float = 0.0  # Bright fraction must be strictly greater


@dataclass
class Resolution:
    """Eye set resolver settings."""

    # "always", "listed" (only correction_images) or "off"
    correction_mode: str = "always"
    correction_images: list[int] = field(default_factory=lambda: [13])
    # "keep_all", "largest_pair" or "most_symmetric"
    surplus_policy: str = "keep_all"


@dataclass
class Pupil:
    """Pupil locator settings."""

    bright_threshold: int = 240  # Threshold on the inverted intensity image
    erosion_trigger: int = 1200  # Erode when more pixels than this are set
    erosion_kernel: int = 3  # Rectangular kernel size
    erosion_iterations: int = 3
    max_area_ratio: float = 0.8  # Contour area / eye box area must stay below


@dataclass
class Render:
    """Overlay drawing settings (BGR colors)."""

    face_color: tuple[int, int, int] = (255, 255, 255)
    face_thickness: int = 1
    eye_color: tuple[int, int, int] = (0, 0, 0)
    eye_thickness: int = 2
    pupil_color: tuple[int, int, int] = (255, 255, 255)
    pupil_thickness: int = 2
    min_radius: int = 5  # Radii below this are scaled for visibility
    radius_scale: int = 3


@dataclass
class Batch:
    """Batch driver settings."""

    input_dir: str = "Images/input"
    output_dir: str = "Images/output"
    extension: str = ".jpg"
    start_index: int = 0
    image_count: int = 18
    abort_on_missing_face: bool = True  # False skips faceless images instead


@dataclass
class Diagnostics:
    """Runtime diagnostics switches."""

    debug_visualization: bool = False  # Step-by-step image windows
    timing_report: bool = True  # Log total and average processing time


@dataclass
class RootConfig:
    """Root configuration holding all modules."""

    face: Face = field(default_factory=Face)
    eye_detection: EyeDetection = field(default_factory=EyeDetection)
    resolution: Resolution = field(default_factory=Resolution)
    pupil: Pupil = field(default_factory=Pupil)
    render: Render = field(default_factory=Render)
    batch: Batch = field(default_factory=Batch)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
