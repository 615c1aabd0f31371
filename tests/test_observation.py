from types import SimpleNamespace as NS
import numpy as np
import pytest
from handgesturekit.hand.observation import DetectorResult, HandObservation, from_recognizer
from handgesturekit.runtime.errors import NoHandDetected

def landmarks(y=0.5):
    return [NS(x=i/40, y=y, z=-0.01*i) for i in range(21)]

def test_from_recognizer_maps_each_hand():
    res = NS(hand_landmarks=[landmarks(), landmarks(0.2)],
             handedness=[[NS(display_name="Right", category_name="Right")],
                         [NS(display_name="", category_name="Left")]],
             gestures=[[NS(category_name="Pointing_Up", score=0.81)], []])
    r = from_recognizer(res, 120.0)
    assert r.timestamp_ms == 120.0 and len(r.hands) == 2
    first, second = r.hands
    assert first.pts.shape == (21,3) and first.pts[20,0] == pytest.approx(0.5)
    assert first.pts[3,2] == pytest.approx(-0.03)
    assert (first.handedness, first.category, first.score) == ("Right", "Pointing_Up", 0.81)
    # empty display name falls back to the category name; no gesture -> no score
    assert (second.handedness, second.category, second.score) == ("Left", None, 0.0)

def test_from_recognizer_without_hands():
    r = from_recognizer(NS(hand_landmarks=[], handedness=[], gestures=[]))
    assert r.hands == []
    with pytest.raises(NoHandDetected):
        r.first_hand()

def test_from_dict():
    r = DetectorResult.from_dict({"timestamp_ms": 5, "hands": [{"pts": np.zeros((21,3)).tolist(), "score": "0.5"}]})
    assert r.timestamp_ms == 5.0 and r.hands[0].score == 0.5 and r.hands[0].handedness is None

def test_observation_rejects_bad_landmarks():
    with pytest.raises(ValueError):
        HandObservation(np.zeros((5,3)))
