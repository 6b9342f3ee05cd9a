"""Utility to set up loggers that write to a central logs/ directory."""

import logging
import os
import re
from datetime import datetime
from pathlib import Path

import eye_finder


# ---------- paths / session ----------
def _log_root() -> Path:
    override = os.getenv("EYE_FINDER_LOG_DIR")
    if override:
        return Path(override)
    pkg_dir = Path(eye_finder.__file__).resolve().parent  # .../eye_finder/eye_finder
    return pkg_dir.parent / "logs"

def _session_id() -> str:
    # Shared across runs if EYE_FINDER_SESSION_ID is set
    return os.getenv("EYE_FINDER_SESSION_ID", datetime.now().strftime("%H-%M-%S"))

def _safe_name(name: str) -> str:
    # Make a safe folder/file name from logger name
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", name).strip("_")

def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean switch from the environment."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


# ---------- aligned formatter ----------
class AlignedFormatter(logging.Formatter):
    """
    Pads/truncates fields to fixed widths so the vertical bars align.
    Only the final %(message)s is free-length.
    """
    def __init__(self, datefmt="%H:%M:%S", name_w=18, level_w=8, ellipsis="…"):
        fmt = (
            "[%(asctime)s.%(msecs)03d] | "
            "%(name_a)s | %(level_a)s | "
            "%(message)s"
        )
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.name_w  = name_w
        self.level_w = level_w
        self.ellipsis = ellipsis

    def _padclip(self, s: str, width: int) -> str:
        s = str(s)
        if len(s) <= width:
            return s.ljust(width)
        ell = self.ellipsis or ""
        keep = max(0, width - len(ell))
        return (s[:keep] + ell)[:width]

    def format(self, record):
        record.name_a  = self._padclip(record.name,      self.name_w)
        record.level_a = self._padclip(record.levelname, self.level_w)
        return super().format(record)


# ---------- setup ----------
_configured: set[str] = set()
_default_level = logging.INFO


def setup_logger(
    name: str,
    level: int | None = None,
    console: bool = True,
    to_file: bool | None = None,
) -> logging.Logger:
    """
    Create a logger that writes:
      1) logs/<module_name>/<module_name>_<time>.log
      2) logs/_combined/<session>.log (shared across modules in the run)
      3) the console, unless console=False

    File output follows EYE_FINDER_LOG_TO_FILE (default on) when to_file is None.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger  # already configured in this process

    if level is None:
        level = _default_level
    if to_file is None:
        to_file = env_flag("EYE_FINDER_LOG_TO_FILE", default=True)

    formatter = AlignedFormatter(datefmt="%H:%M:%S", name_w=18, level_w=8, ellipsis="…")

    if to_file:
        root = _log_root()
        session = _session_id()
        time_only = datetime.now().strftime("%H-%M-%S")

        # per-module file in its own folder
        mod = _safe_name(name)
        mod_dir = root / mod
        mod_dir.mkdir(parents=True, exist_ok=True)
        mod_path = mod_dir / f"{mod}_{time_only}.log"

        # combined file for this session (shared across modules)
        comb_dir = root / "_combined"
        comb_dir.mkdir(parents=True, exist_ok=True)
        comb_path = comb_dir / f"{session}.log"

        fh = logging.FileHandler(mod_path, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

        ch_all = logging.FileHandler(comb_path, encoding="utf-8")
        ch_all.setLevel(level)
        ch_all.setFormatter(formatter)
        logger.addHandler(ch_all)

    if console:
        sh = logging.StreamHandler()
        sh.setLevel(level)
        sh.setFormatter(formatter)
        logger.addHandler(sh)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.setLevel(level)
    logger.propagate = False
    _configured.add(name)
    return logger


def set_level(level: int) -> None:
    """Apply a level to every logger created through setup_logger(), now and later."""
    global _default_level
    _default_level = level
    for name in _configured:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
