from __future__ import annotations

class GestureError(Exception):
    pass

class FrameError(GestureError):
    """Per-frame failure; the session skips the frame and carries on."""

class DetectorNotReady(FrameError):
    def __init__(self):
        super().__init__("detector is still initializing, wait for Session.start()")

class NoHandDetected(FrameError):
    def __init__(self):
        super().__init__("no hand in frame")

class DuplicateFrameTimestamp(FrameError):
    def __init__(self, ts_ms: float):
        super().__init__(f"frame at {ts_ms} ms already processed")
        self.ts_ms = ts_ms

class DetectorInitError(GestureError):
    """The detector could not be created; the session cannot start."""
