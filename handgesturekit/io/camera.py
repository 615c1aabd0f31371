from __future__ import annotations
import cv2, time
from typing import Iterator, Dict, Any

def frames(camera: int|str=0, width: int=1280, height: int=720) -> Iterator[Dict[str,Any]]:
    cap = cv2.VideoCapture(camera)
    if width:  cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
    if height: cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
    # keep only the newest frame so a slow pipeline skips instead of lagging
    cap.set(cv2.CAP_PROP_BUFFERSIZE, 1)
    if not cap.isOpened():
        raise RuntimeError(f"Cannot open camera {camera}")
    t0 = time.monotonic()
    try:
        while True:
            ok, frame = cap.read()
            if not ok: break
            # webcams often report 0 for the position; fall back to the wall clock
            ts = cap.get(cv2.CAP_PROP_POS_MSEC) or (time.monotonic() - t0) * 1000.0
            yield {"image": frame, "meta": {"ts_ms": float(ts)}}
    finally:
        cap.release()
