"""Editor configuration and its YAML serialization.

Configuration lives in a small YAML file:

    history_limit: 100
    close_threshold_px: 10
    mouse_hit_threshold_px: 10
    touch_hit_threshold_px: 24

Missing keys fall back to defaults. A missing file falls back to defaults
with a warning; malformed content raises ``PolyDrawError``.
"""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from polydraw.common.errors import raise_with_remedy, warn_soft_degrade
from polydraw.common.types import InputType

DEFAULT_CONFIG_FILE = Path(__file__).resolve().parent.parent / "config" / "default_editor.yaml"
"""Bundled YAML with the default settings."""


@dataclass
class EditorConfig:
    """Tunable editor options."""

    history_limit: int = 100
    """Maximum number of undoable actions."""

    close_threshold_px: float = 10.0
    """Screen distance to the first vertex that closes a polygon being drawn."""

    mouse_hit_threshold_px: float = 10.0
    """Vertex/midpoint hit radius for mouse input."""

    touch_hit_threshold_px: float = 24.0
    """Vertex/midpoint hit radius for touch input."""

    def validate(self) -> "EditorConfig":
        """Check value ranges.

        Returns:
            self, to allow chaining.

        Raises:
            PolyDrawError: If any value is out of range.
        """
        if not isinstance(self.history_limit, int) or self.history_limit < 1:
            raise_with_remedy(
                f"Invalid history_limit: {self.history_limit!r}",
                "Set history_limit to a positive integer.",
            )
        for name in ("close_threshold_px", "mouse_hit_threshold_px", "touch_hit_threshold_px"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or value <= 0:
                raise_with_remedy(
                    f"Invalid {name}: {value!r}",
                    f"Set {name} to a positive number of pixels.",
                )
        return self

    def hit_threshold(self, input_type: InputType) -> float:
        """Vertex/midpoint hit radius for the given pointer modality."""
        if input_type == InputType.TOUCH:
            return self.touch_hit_threshold_px
        return self.mouse_hit_threshold_px

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EditorConfig":
        """Reconstruct from dict, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise_with_remedy(
                f"Unknown editor config keys: {', '.join(unknown)}",
                f"Allowed keys are: {', '.join(sorted(known))}.",
            )
        return cls(**data).validate()


def load_editor_config(yaml_file: str | Path) -> EditorConfig:
    """Load editor configuration from a YAML file.

    Args:
        yaml_file: Path to YAML file

    Returns:
        Validated EditorConfig (defaults if the file does not exist or is empty)

    Raises:
        PolyDrawError: If the YAML cannot be parsed or holds invalid values
    """
    path = Path(yaml_file)
    if not path.exists():
        warn_soft_degrade("editor config", f"file not found: {path}", "default settings")
        return EditorConfig()

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse editor config YAML: {e}")
        raise_with_remedy(f"Malformed editor config: {path}", "Fix the YAML syntax.")

    if not data:
        logger.warning(f"Empty editor config file: {path}")
        return EditorConfig()
    if not isinstance(data, dict):
        raise_with_remedy(
            f"Editor config must be a mapping, got {type(data).__name__}",
            "Write the config as 'key: value' lines.",
        )

    config = EditorConfig.from_dict(data)
    logger.info(f"Loaded editor config from {path}")
    return config


def save_editor_config(config: EditorConfig, yaml_file: str | Path) -> None:
    """Save editor configuration to YAML with sorted keys."""
    path = Path(yaml_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config.validate().to_dict(), f, default_flow_style=False, sort_keys=True)
    logger.info(f"Saved editor config to {path}")
