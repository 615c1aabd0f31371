from __future__ import annotations
from typing import Optional, Tuple
from ..config import GestureConfig
from ..hand.features import extract_features
from ..hand.gestures import classify, HORIZONTAL_SCROLL, VERTICAL_SCROLL
from ..hand.observation import DetectorResult
from ..runtime.errors import NoHandDetected
from ..runtime.events import DisplayLabel, GestureEvent
from .state import GestureState, StabilityTracker

def make_tracker(cfg: GestureConfig) -> StabilityTracker:
    return StabilityTracker(cfg.stability_threshold, cfg.movement_deadzone)

def process_frame(state: GestureState, result: DetectorResult, cfg: GestureConfig,
                  tracker: Optional[StabilityTracker]=None) -> Tuple[GestureState, GestureEvent]:
    """
    (previous state, detector result) -> (new state, event). No side effects;
    only the first hand is looked at.
    """
    tracker = tracker or make_tracker(cfg)
    try:
        hand = result.first_hand()
    except NoHandDetected:
        # no hand counts as a failed two-finger pose
        return tracker.reset(), GestureEvent()

    f = extract_features(hand.pts)
    c = classify(f, hand.category, cfg.pinch_distance_threshold, cfg.two_finger_proximity_threshold)
    state, motion = tracker.update(state, f, c.two_finger)

    label = c.label
    if motion is not None:
        kind = "scroll_horizontal" if motion.axis == "horizontal" else "scroll_vertical"
        label = HORIZONTAL_SCROLL if motion.axis == "horizontal" else VERTICAL_SCROLL
        ev = GestureEvent(kind=kind, amount=motion.amount)
    elif c.click:
        ev = GestureEvent(kind="click", pos=f.index_tip)
    elif c.cursor:
        ev = GestureEvent(kind="cursor", pos=f.index_tip)
    else:
        ev = GestureEvent()
    ev.label = DisplayLabel.from_score(label, hand.score, hand.handedness)
    return state, ev
