from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from .features import HandFeatures

CURSOR="cursor"; CLICK="click"
HORIZONTAL_SCROLL="horizontal scroll"; VERTICAL_SCROLL="vertical scroll"

@dataclass(frozen=True)
class Classification:
    label: Optional[str]
    two_finger: bool = False
    cursor: bool = False
    click: bool = False

def two_finger_candidate(f: HandFeatures, thr: float = 0.05) -> bool:
    return (f.is_index_raised and f.is_middle_raised and f.index_middle_dist < thr
            and f.is_ring_down and f.is_pinky_down)

def cursor_pose(f: HandFeatures) -> bool:
    # thumb and index up, others curled
    return f.is_thumb_up and f.is_index_raised and f.is_middle_down and f.is_ring_down and f.is_pinky_down

def pinch(f: HandFeatures, thr: float = 0.04) -> bool:
    return cursor_pose(f) and f.thumb_index_dist < thr

def classify(f: HandFeatures, baseline: Optional[str] = None, pinch_thr: float = 0.04,
             proximity_thr: float = 0.05) -> Classification:
    """
    Sequential overrides, later checks win: two-finger candidate, cursor, click.
    Falls back to the upstream baseline label when none applies.
    """
    label = baseline
    two = two_finger_candidate(f, proximity_thr)
    cur = cursor_pose(f)
    if cur: label = CURSOR
    clk = pinch(f, pinch_thr)
    if clk: label = CLICK
    return Classification(label=label, two_finger=two, cursor=cur and not clk, click=clk)
