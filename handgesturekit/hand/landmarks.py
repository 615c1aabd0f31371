from __future__ import annotations
import logging, urllib.request
from pathlib import Path
import mediapipe as mp
from mediapipe.tasks import python
from mediapipe.tasks.python import vision
import cv2
from .observation import DetectorResult, from_recognizer
from ..runtime.errors import DetectorInitError

log = logging.getLogger(__name__)

def ensure_model(path: str|Path, url: str) -> Path:
    path = Path(path)
    if path.exists(): return path
    log.info("model not found at %s, downloading %s", path, url)
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        urllib.request.urlretrieve(url, path)
    except Exception as e:
        if path.exists(): path.unlink()
        raise DetectorInitError(f"failed to download model from {url}: {e}") from e
    log.info("model saved to %s (%d bytes)", path, path.stat().st_size)
    return path

class HandLandmarks:
    """MediaPipe GestureRecognizer: 21 landmarks, handedness and a baseline category per hand."""
    def __init__(self, model_path: str|Path, num_hands:int=1, mode:str="video", model_url:str|None=None):
        if model_url: model_path = ensure_model(model_path, model_url)
        running = vision.RunningMode.VIDEO if mode == "video" else vision.RunningMode.IMAGE
        try:
            options = vision.GestureRecognizerOptions(
                base_options=python.BaseOptions(model_asset_path=str(model_path)),
                running_mode=running, num_hands=num_hands)
            self.recognizer = vision.GestureRecognizer.create_from_options(options)
        except Exception as e:
            raise DetectorInitError(f"failed to create gesture recognizer: {e}") from e
        self.mode = mode

    def _image(self, frame_bgr):
        rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        return mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb)

    def __call__(self, frame_bgr, timestamp_ms: float) -> DetectorResult:
        res = self.recognizer.recognize_for_video(self._image(frame_bgr), int(timestamp_ms))
        return from_recognizer(res, timestamp_ms)

    def recognize(self, frame_bgr) -> DetectorResult:
        return from_recognizer(self.recognizer.recognize(self._image(frame_bgr)))

    def close(self):
        self.recognizer.close()
