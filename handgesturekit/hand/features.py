from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import numpy as np

WRIST=0
THUMB_BASE=2; THUMB_TIP=4
INDEX_BASE=5; INDEX_TIP=8
MIDDLE_BASE=9; MIDDLE_TIP=12
RING_BASE=13; RING_TIP=16
PINKY_BASE=17; PINKY_TIP=20
NUM_LANDMARKS=21

Point = Tuple[float, float]

@dataclass(frozen=True)
class HandFeatures:
    is_index_raised: bool
    is_middle_raised: bool
    is_ring_down: bool
    is_pinky_down: bool
    is_thumb_up: bool
    is_thumb_down: bool
    is_middle_down: bool
    thumb_index_dist: float
    index_middle_dist: float
    index_tip: Point
    middle_tip: Point

def check_pts(pts) -> np.ndarray:
    pts = np.asarray(pts, dtype=float)
    if pts.ndim != 2 or pts.shape[0] != NUM_LANDMARKS or pts.shape[1] < 2:
        raise ValueError(f"expected ({NUM_LANDMARKS}, 2|3) landmarks, got shape {pts.shape}")
    return pts

def dist(pts: np.ndarray, a: int, b: int) -> float:
    # image plane only, z is ignored
    return float(np.linalg.norm(pts[a,:2] - pts[b,:2]))

def extract_features(pts) -> HandFeatures:
    """Finger pose predicates for one hand. Lower y is higher on screen."""
    pts = check_pts(pts)
    y = pts[:,1]
    return HandFeatures(
        is_index_raised = bool(y[INDEX_TIP] < y[INDEX_BASE]),
        is_middle_raised = bool(y[MIDDLE_TIP] < y[MIDDLE_BASE]),
        is_ring_down = bool(y[RING_TIP] >= y[RING_BASE]),
        is_pinky_down = bool(y[PINKY_TIP] >= y[PINKY_BASE]),
        is_thumb_up = bool(y[THUMB_TIP] < y[THUMB_BASE]),
        is_thumb_down = bool(y[THUMB_TIP] >= y[THUMB_BASE]),
        is_middle_down = bool(y[MIDDLE_TIP] >= y[MIDDLE_BASE]),
        thumb_index_dist = dist(pts, THUMB_TIP, INDEX_TIP),
        index_middle_dist = dist(pts, INDEX_TIP, MIDDLE_TIP),
        index_tip = (float(pts[INDEX_TIP,0]), float(pts[INDEX_TIP,1])),
        middle_tip = (float(pts[MIDDLE_TIP,0]), float(pts[MIDDLE_TIP,1])),
    )
