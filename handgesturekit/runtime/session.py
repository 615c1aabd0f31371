from __future__ import annotations
import asyncio, logging, time
from typing import Any, Callable, Dict, Iterable, List, Optional
from ..config import GestureConfig
from ..fuse.pipeline import make_tracker, process_frame
from ..fuse.state import GestureState
from ..hand.observation import DetectorResult
from .dispatch import ActionDispatcher, UIHost
from .errors import DetectorInitError, DetectorNotReady, DuplicateFrameTimestamp, FrameError
from .events import Action, ws_broadcast

log = logging.getLogger(__name__)

Detector = Callable[[Any, float], DetectorResult]

class Session:
    """
    One live run of frame processing. Owns the GestureState; frames are handled
    strictly one at a time and the only await per frame is the detector call.
    """
    def __init__(self, detector_factory: Callable[[], Detector], host: UIHost,
                 cfg: Optional[GestureConfig]=None,
                 on_actions: Optional[Callable[[List[Action]], Any]]=None):
        self.cfg = cfg or GestureConfig()
        self._factory = detector_factory
        self.detector: Optional[Detector] = None
        self.dispatcher = ActionDispatcher(host, self.cfg)
        self.tracker = make_tracker(self.cfg)
        self.state = GestureState()
        self.on_actions = on_actions
        self.active = False
        self._generation = 0
        self._last_ts: Optional[float] = None

    @property
    def ready(self) -> bool:
        return self.detector is not None

    async def start(self):
        try:
            self.detector = await asyncio.to_thread(self._factory)
        except Exception as e:
            raise DetectorInitError(f"detector failed to initialize: {e}") from e
        self.state = GestureState(); self._last_ts = None
        self.active = True
        log.info("session started")

    def stop(self):
        if self.active: log.info("session stopped")
        self.active = False
        self._generation += 1
        self.state = GestureState()

    def close(self):
        """Stop and release the detector; start() builds a fresh one."""
        self.stop()
        close = getattr(self.detector, "close", None)
        if callable(close): close()
        self.detector = None

    async def step(self, image: Any, ts_ms: float) -> Optional[List[Action]]:
        """Process one frame. Returns the dispatched actions, or None if a stale result was dropped."""
        if not self.ready:
            raise DetectorNotReady()
        if self._last_ts is not None and ts_ms == self._last_ts:
            raise DuplicateFrameTimestamp(ts_ms)
        self._last_ts = ts_ms
        gen = self._generation
        result = await asyncio.to_thread(self.detector, image, ts_ms)
        if gen != self._generation or not self.active:
            log.debug("discarding inference for cancelled frame at %s ms", ts_ms)
            return None
        self.state, ev = process_frame(self.state, result, self.cfg, self.tracker)
        actions = self.dispatcher.dispatch(ev)
        if self.on_actions is not None:
            r = self.on_actions(actions)
            if asyncio.iscoroutine(r): await r
        return actions

    async def run(self, frames: Iterable[Dict[str,Any]], paced: bool=True):
        """Drive step() from a frame source until stop() or the source ends."""
        period = 1.0 / self.cfg.fps
        if not self.active: await self.start()
        try:
            for f in frames:
                if not self.active: break
                t0 = time.monotonic()
                try:
                    await self.step(f["image"], f["meta"]["ts_ms"])
                except FrameError as e:
                    log.debug("frame skipped: %s", e)
                except Exception:
                    log.exception("frame failed")
                # next frame only after this one is fully dispatched
                delay = max(0.0, period - (time.monotonic() - t0)) if paced else 0.0
                await asyncio.sleep(delay)
        finally:
            self.stop()

async def run_with_broadcast(session: Session, frames: Iterable[Dict[str,Any]], queue: "asyncio.Queue[str]",
                             host: str="0.0.0.0", port: int=8765, paced: bool=True):
    """
    Run the session next to the WebSocket broadcast. A broadcast failure
    (e.g. port in use) stops the session and is re-raised.
    """
    loop = asyncio.create_task(session.run(frames, paced=paced))
    bcast = asyncio.create_task(ws_broadcast(queue, host, port))
    done, _ = await asyncio.wait({loop, bcast}, return_when=asyncio.FIRST_COMPLETED)
    if bcast in done:
        session.stop()
        await loop
        if bcast.exception() is not None:
            log.error("broadcast on %s:%d failed: %s", host, port, bcast.exception())
        bcast.result()
        return
    bcast.cancel()
    await asyncio.gather(bcast, return_exceptions=True)
    loop.result()
