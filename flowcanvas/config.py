import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union
import yaml
from blinker import Signal
from platformdirs import user_config_dir


logger = logging.getLogger(__name__)


CONFIG_DIR = Path(user_config_dir("flowcanvas"))
CONFIG_FILE = CONFIG_DIR / "config.yaml"


class SnapConfig:
    """
    Tunable distances of the snap behavior, in canvas pixels.

    - element_snap_range: margin added around a shape's rectangle when
      looking for shapes near a dragged handle.
    - connection_point_snap_range: how close a handle must come to a
      connection point to attach to it.
    - detach_velocity: per-axis movement in one sample that pulls an
      attached handle away.
    - connection_point_marker_size: half size of the markers drawn on
      highlighted connection points.
    """

    FIELDS = (
        "element_snap_range",
        "connection_point_snap_range",
        "detach_velocity",
        "connection_point_marker_size",
    )

    def __init__(
        self,
        element_snap_range: int = 10,
        connection_point_snap_range: int = 8,
        detach_velocity: int = 15,
        connection_point_marker_size: int = 3,
    ):
        self.element_snap_range = element_snap_range
        self.connection_point_snap_range = connection_point_snap_range
        self.detach_velocity = detach_velocity
        self.connection_point_marker_size = connection_point_marker_size
        self.changed = Signal()
        self._validate()

    def _validate(self):
        for name in self.FIELDS:
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ValueError(
                    f"{name} must be a positive integer, got {value!r}"
                )

    def set(self, **kwargs: int):
        unknown = set(kwargs) - set(self.FIELDS)
        if unknown:
            raise ValueError(f"Unknown snap settings: {sorted(unknown)}")
        old = self.to_dict()
        for name, value in kwargs.items():
            setattr(self, name, value)
        try:
            self._validate()
        except ValueError:
            for name, value in old.items():
                setattr(self, name, value)
            raise
        if self.to_dict() != old:
            self.changed.send(self)

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.FIELDS}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SnapConfig":
        known = {k: v for k, v in data.items() if k in cls.FIELDS}
        for key in set(data) - set(known):
            logger.warning(f"Ignoring unknown config key '{key}'")
        return cls(**known)


class ConfigManager:
    def __init__(self, filepath: Optional[Union[str, Path]] = None):
        self.filepath = Path(filepath) if filepath else CONFIG_FILE
        self.config: SnapConfig = SnapConfig()
        self.load_config()

    def save(self):
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(self.filepath, "w") as f:
            yaml.safe_dump(self.config.to_dict(), f)
        logger.info(f"Saved config to {self.filepath}")

    def load_config(self) -> SnapConfig:
        if not self.filepath.exists():
            self.config = SnapConfig()  # Use defaults
            return self.config

        with open(self.filepath, "r") as f:
            data = yaml.safe_load(f)
        if not data:
            self.config = SnapConfig()
            return self.config
        self.config = SnapConfig.from_dict(data)
        logger.info(f"Loaded config from {self.filepath}")
        return self.config
