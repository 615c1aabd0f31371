from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import numpy as np
from .features import check_pts
from ..runtime.errors import NoHandDetected

@dataclass
class HandObservation:
    pts: np.ndarray              # (21,3) normalized x,y,z
    handedness: Optional[str] = None
    score: float = 0.0           # confidence of the baseline category
    category: Optional[str] = None

    def __post_init__(self):
        self.pts = check_pts(self.pts)

    @classmethod
    def from_dict(cls, d: Dict[str,Any]) -> "HandObservation":
        return cls(pts=np.asarray(d["pts"], dtype=float), handedness=d.get("handedness"),
                   score=float(d.get("score", 0.0)), category=d.get("category"))

@dataclass
class DetectorResult:
    hands: List[HandObservation] = field(default_factory=list)
    timestamp_ms: float = 0.0

    def first_hand(self) -> HandObservation:
        if not self.hands: raise NoHandDetected()
        return self.hands[0]

    @classmethod
    def from_dict(cls, d: Dict[str,Any]) -> "DetectorResult":
        return cls(hands=[HandObservation.from_dict(h) for h in d.get("hands", [])],
                   timestamp_ms=float(d["timestamp_ms"]))

def from_recognizer(res, timestamp_ms: float = 0.0) -> DetectorResult:
    """Map a MediaPipe GestureRecognizerResult; hands missing a gesture or handedness keep defaults."""
    hands=[]
    for i, lm in enumerate(res.hand_landmarks or []):
        pts = np.array([(p.x,p.y,p.z) for p in lm], dtype=float)
        handed = res.handedness[i][0] if i < len(res.handedness) and res.handedness[i] else None
        gest = res.gestures[i][0] if i < len(res.gestures) and res.gestures[i] else None
        hands.append(HandObservation(
            pts=pts,
            handedness=(handed.display_name or handed.category_name) if handed else None,
            score=float(gest.score) if gest else 0.0,
            category=gest.category_name if gest else None))
    return DetectorResult(hands=hands, timestamp_ms=timestamp_ms)
