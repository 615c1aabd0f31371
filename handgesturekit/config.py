from __future__ import annotations
import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

MODEL_URL = ("https://storage.googleapis.com/mediapipe-models/gesture_recognizer/"
             "gesture_recognizer/float16/1/gesture_recognizer.task")

class GestureConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", protected_namespaces=())

    # gesture thresholds, normalized landmark units
    stability_threshold: int = Field(1, ge=1)
    pinch_distance_threshold: float = Field(0.04, ge=0)
    two_finger_proximity_threshold: float = Field(0.05, ge=0)
    movement_deadzone: float = Field(0.01, ge=0)
    scroll_damping: float = Field(0.8, gt=0)
    # desktop wheel clicks per scrolled pixel
    scroll_scale: float = Field(1.0, gt=0)

    # runtime
    model_path: str = "gesture_recognizer.task"
    model_url: str = MODEL_URL
    num_hands: int = Field(1, ge=1)
    camera: Union[int, str] = 0
    width: int = Field(1280, gt=0)
    height: int = Field(720, gt=0)
    fps: float = Field(30.0, gt=0)

def load_config(path: Optional[Union[str, Path]] = None, **overrides: Any) -> GestureConfig:
    """Read a YAML config (missing keys take defaults); non-None overrides win."""
    data: Dict[str, Any] = {}
    if path is not None:
        with open(path, "r") as f: data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping at top level")
    data.update({k: v for k, v in overrides.items() if v is not None})
    return GestureConfig(**data)

def dump_config(cfg: GestureConfig) -> str:
    return yaml.safe_dump(cfg.model_dump(), sort_keys=False)
