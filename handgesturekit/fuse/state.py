from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Tuple
from ..hand.features import HandFeatures, Point

@dataclass(frozen=True)
class GestureState:
    last_index_pos: Optional[Point] = None
    last_middle_pos: Optional[Point] = None
    stable_frame_count: int = 0

    @property
    def has_baseline(self) -> bool:
        return self.last_index_pos is not None and self.last_middle_pos is not None

    @property
    def phase(self) -> str:
        return "tracking" if self.has_baseline else "idle"

@dataclass(frozen=True)
class Motion:
    axis: str  # "horizontal" | "vertical"
    amount: float

class StabilityTracker:
    """
    Turns two-finger fingertip motion into scroll motion.
    States: idle -> tracking (baseline set, no event), tracking -> tracking (may scroll),
    any -> idle as soon as the two-finger pose is lost.
    """
    def __init__(self, stability_threshold:int=1, movement_deadzone:float=0.01):
        self.stability_threshold = stability_threshold
        self.movement_deadzone = movement_deadzone

    def reset(self) -> GestureState:
        return GestureState()

    def update(self, state: GestureState, f: HandFeatures, candidate: bool) -> Tuple[GestureState, Optional[Motion]]:
        if not candidate:
            return self.reset(), None
        count = state.stable_frame_count + 1
        motion = None
        if count >= self.stability_threshold and state.has_baseline:
            motion = self._motion(state, f)
        # the first qualifying frame only sets the baseline
        new = replace(state, stable_frame_count=count, last_index_pos=f.index_tip, last_middle_pos=f.middle_tip)
        return new, motion

    def _motion(self, state: GestureState, f: HandFeatures) -> Optional[Motion]:
        (ix,iy), (mx,my) = f.index_tip, f.middle_tip
        (lix,liy), (lmx,lmy) = state.last_index_pos, state.last_middle_pos
        dx = ((ix - lix) + (mx - lmx)) / 2
        dy = ((iy - liy) + (my - lmy)) / 2
        dz = self.movement_deadzone
        if abs(dx) > abs(dy) and abs(dx) > dz:
            return Motion("horizontal", dx)
        if abs(dy) > abs(dx) and abs(dy) > dz:
            return Motion("vertical", dy)
        return None
