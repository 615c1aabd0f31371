import pytest
from handgesturekit.fuse.state import GestureState, StabilityTracker
from handgesturekit.hand.features import extract_features
from hands import two_finger

def feed(tracker, state, pts, candidate=True):
    return tracker.update(state, extract_features(pts), candidate)

def test_first_frame_only_sets_baseline():
    tr = StabilityTracker()
    s, m = feed(tr, GestureState(), two_finger(0.40))
    assert m is None
    assert s.stable_frame_count == 1 and s.phase == "tracking"
    assert s.last_index_pos == (0.40, 0.3)

def test_horizontal_scroll():
    tr = StabilityTracker()
    s, _ = feed(tr, GestureState(), two_finger(0.40))
    s, m = feed(tr, s, two_finger(0.46))
    assert m.axis == "horizontal" and m.amount == pytest.approx(0.06)
    assert s.last_index_pos == (0.46, 0.3)

def test_vertical_scroll_up():
    tr = StabilityTracker()
    s, _ = feed(tr, GestureState(), two_finger(0.4, iy=0.30))
    s, m = feed(tr, s, two_finger(0.4, iy=0.25))
    assert m.axis == "vertical" and m.amount == pytest.approx(-0.05)

def test_identical_frame_is_below_deadzone():
    tr = StabilityTracker()
    s, _ = feed(tr, GestureState(), two_finger(0.40))
    s, m = feed(tr, s, two_finger(0.40))
    assert m is None and s.stable_frame_count == 2

def test_small_motion_is_below_deadzone():
    tr = StabilityTracker()
    s, _ = feed(tr, GestureState(), two_finger(0.400))
    _, m = feed(tr, s, two_finger(0.405))
    assert m is None

@pytest.mark.parametrize("dx,dy,axis", [(0.05,0.02,"horizontal"), (-0.05,0.02,"horizontal"),
                                        (0.02,0.05,"vertical"), (0.02,-0.05,"vertical"),
                                        (0.03,-0.029,"horizontal")])
def test_only_dominant_axis_fires(dx, dy, axis):
    tr = StabilityTracker()
    s, _ = feed(tr, GestureState(), two_finger(0.4, iy=0.3))
    _, m = feed(tr, s, two_finger(0.4 + dx, iy=0.3 + dy))
    assert m.axis == axis
    assert m.amount == pytest.approx(dx if axis == "horizontal" else dy)

def test_reset_after_long_history():
    tr = StabilityTracker()
    s = GestureState()
    for i in range(25):
        s, _ = feed(tr, s, two_finger(0.3 + i * 0.02))
    assert s.stable_frame_count == 25
    s, m = feed(tr, s, two_finger(0.8), candidate=False)
    assert m is None and s == GestureState() and s.phase == "idle"
    # history is gone: the next qualifying frame is a fresh baseline
    s, m = feed(tr, s, two_finger(0.5))
    assert m is None and s.stable_frame_count == 1

def test_stability_threshold_delays_scrolling():
    tr = StabilityTracker(stability_threshold=3)
    s, _ = feed(tr, GestureState(), two_finger(0.30))
    s, m = feed(tr, s, two_finger(0.36))
    assert m is None and s.stable_frame_count == 2
    s, m = feed(tr, s, two_finger(0.42))
    assert m is not None and m.amount == pytest.approx(0.06)

def test_state_is_not_mutated():
    tr = StabilityTracker()
    s0 = GestureState()
    s1, _ = feed(tr, s0, two_finger(0.4))
    assert s0 == GestureState() and s1 is not s0
