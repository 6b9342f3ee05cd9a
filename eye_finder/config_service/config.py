"""In-memory config with get/set APIs."""

import json
from dataclasses import asdict, fields, is_dataclass
from pathlib import Path
from typing import Any, Tuple

from eye_finder.config_service.config_modules import RootConfig
import eye_finder.config_service.config_modules as config_modules
from eye_finder.errors import ConfigError
from eye_finder.utilities.logger_setup import setup_logger


class Config:
    """
    In-memory config with just two APIs:
      - set("pupil.bright_threshold", 235)
      - get("batch.image_count") -> 18
    Updates happen in-place on dataclass instances.
    """
    def __init__(self, root: RootConfig | None = None) -> None:
        self.logger = setup_logger("Config")
        self._root = root if root is not None else RootConfig()


    # --- direct accessors ---
    @property
    def face(self) -> config_modules.Face:
        """Direct access to face config."""
        return self._root.face
    @property
    def eye_detection(self) -> config_modules.EyeDetection:
        """Direct access to eye detection config."""
        return self._root.eye_detection
    @property
    def resolution(self) -> config_modules.Resolution:
        """Direct access to eye set resolution config."""
        return self._root.resolution
    @property
    def pupil(self) -> config_modules.Pupil:
        """Direct access to pupil config."""
        return self._root.pupil
    @property
    def render(self) -> config_modules.Render:
        """Direct access to render config."""
        return self._root.render
    @property
    def batch(self) -> config_modules.Batch:
        """Direct access to batch config."""
        return self._root.batch
    @property
    def diagnostics(self) -> config_modules.Diagnostics:
        """Direct access to diagnostics config."""
        return self._root.diagnostics


    #-- get/set API ---
    def get(self, path: str) -> Any:
        """Get a config value."""
        obj, attr = self._traverse(path)
        return getattr(obj, attr)


    def set(
        self,
        path: str,
        value: Any
    ) -> None:
        """Set a config value.

        Arguments:
            path: The config path to set (e.g., "batch.start_index").
            value: The new value, coerced to the type of the current value.
        """
        obj, attr = self._traverse(path)
        old = getattr(obj, attr)
        target_type = type(old)

        new: Any
        try:
            # handle bool specially because bool("0") is True
            if target_type is bool and isinstance(value, str):
                v = value.strip().lower()
                if v in ("1", "true", "yes", "on"):
                    new = True
                elif v in ("0", "false", "no", "off"):
                    new = False
                else:
                    raise ValueError(f"cannot parse bool from '{value}'")
            elif target_type is int and isinstance(value, str) and value.isdigit():
                new = int(value)
            elif target_type in (int, float) and isinstance(value, str):
                new = target_type(float(value))
            elif target_type in (list, tuple) and isinstance(value, str):
                items = value.strip().strip("[]()").split(",")
                new = target_type(int(v) for v in items if v.strip())
            elif target_type is str:
                new = str(value)
            else:
                new = target_type(value)

        except (ValueError, TypeError) as e:
            self.logger.error("Failed to set %s to %r (expected %s): %s",
                path, value, target_type.__name__, e)
            raise ConfigError(
                f"cannot set {path} to {value!r} (expected {target_type.__name__})"
            ) from e

        if new == old:
            return
        setattr(obj, attr, new)
        self.logger.debug("%s: %r -> %r", path, old, new)


    def load_json(self, path: str | Path) -> None:
        """Apply overrides from a JSON file shaped like {"section": {"key": value}}."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"cannot load config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"config file {path} must hold a JSON object")

        for section, values in data.items():
            if not isinstance(values, dict):
                raise ConfigError(f"config section '{section}' must be an object")
            for key, value in values.items():
                self.set(f"{section}.{key}", value)

        self.logger.info("Loaded config overrides from %s", path)


    def as_dict(self) -> dict[str, Any]:
        """Plain nested dict of the current values."""
        return asdict(self._root)


    # --- helpers ---
    def _traverse(
        self,
        path: str
    ) -> Tuple[Any, str]:
        """
        Returns (parent_object, attribute_name) for a dotted path like 'pupil.bright_threshold'.
        """
        parts = path.split(".")

        if len(parts) < 2:
            self.logger.error("Config: invalid path '%s'", path)
            raise ConfigError("Use dotted path like 'pupil.bright_threshold'")

        node: Any = self._root

        for p in parts[:-1]:
            if not is_dataclass(node) or p not in {f.name for f in fields(node)}:
                raise ConfigError(f"unknown config section '{p}' in '{path}'")
            node = getattr(node, p)

        if not is_dataclass(node) or parts[-1] not in {f.name for f in fields(node)}:
            raise ConfigError(f"unknown config key '{path}'")

        return node, parts[-1]
