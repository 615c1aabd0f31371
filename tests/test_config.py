import pytest
from pathlib import Path
from pydantic import ValidationError
from handgesturekit.config import GestureConfig, load_config, dump_config

def test_defaults():
    c = GestureConfig()
    assert (c.stability_threshold, c.pinch_distance_threshold, c.two_finger_proximity_threshold,
            c.movement_deadzone, c.scroll_damping) == (1, 0.04, 0.05, 0.01, 0.8)

def test_load_yaml_with_overrides(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text("movement_deadzone: 0.02\ncamera: 2\n")
    c = load_config(p, camera=None, fps=15)
    assert c.movement_deadzone == 0.02 and c.camera == 2 and c.fps == 15
    assert c.scroll_damping == 0.8

def test_empty_file_gives_defaults(tmp_path):
    p = tmp_path / "empty.yaml"; p.write_text("")
    assert load_config(p) == GestureConfig()

def test_shipped_example_matches_defaults():
    p = Path(__file__).parent.parent / "examples" / "config.yaml"
    assert load_config(p) == GestureConfig()

@pytest.mark.parametrize("bad", ["scroll_damping: 0", "movement_deadzone: -1",
                                 "stability_threshold: 0", "unknown_key: 1"])
def test_invalid_values(tmp_path, bad):
    p = tmp_path / "bad.yaml"; p.write_text(bad)
    with pytest.raises(ValidationError):
        load_config(p)

def test_dump_roundtrip(tmp_path):
    p = tmp_path / "out.yaml"
    p.write_text(dump_config(GestureConfig(scroll_damping=0.5)))
    assert load_config(p).scroll_damping == 0.5

def test_scroll_scale(tmp_path):
    assert GestureConfig().scroll_scale == 1.0
    p = tmp_path / "s.yaml"; p.write_text("scroll_scale: 0.05\n")
    assert load_config(p).scroll_scale == 0.05
    with pytest.raises(ValidationError):
        GestureConfig(scroll_scale=0)
