from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Optional, Literal, Tuple, Union
import asyncio, logging, time
import websockets

log = logging.getLogger(__name__)

class DisplayLabel(BaseModel):
    category: Optional[str]=None
    confidence_percent: float=0.0
    handedness: Optional[str]=None

    @classmethod
    def from_score(cls, category: Optional[str], score: float, handedness: Optional[str]) -> "DisplayLabel":
        return cls(category=category, confidence_percent=round(score*100, 2), handedness=handedness)

    def text(self) -> str:
        return f"GestureRecognizer: {self.category}\n Confidence: {self.confidence_percent:.2f} %\n Handedness: {self.handedness}"

class GestureEvent(BaseModel):
    """Outcome of one frame. label=None means nothing to display."""
    kind: Literal["cursor","click","scroll_horizontal","scroll_vertical","none"]="none"
    pos: Optional[Tuple[float,float]]=None
    amount: float=0.0
    label: Optional[DisplayLabel]=None

# Actions handed to the UI host, one record per side effect
class _Action(BaseModel):
    ts: float = Field(default_factory=lambda: time.time())

class SetCursorPosition(_Action):
    type: Literal["set_cursor"]="set_cursor"
    x: float; y: float

class DispatchClick(_Action):
    type: Literal["click"]="click"
    x: float; y: float

class ScrollBy(_Action):
    type: Literal["scroll"]="scroll"
    dx: float=0.0; dy: float=0.0

class SetDisplayedLabel(_Action):
    type: Literal["set_label"]="set_label"
    category: Optional[str]=None
    confidence_percent: float=0.0
    handedness: Optional[str]=None

class ClearDisplayedLabel(_Action):
    type: Literal["clear_label"]="clear_label"

Action = Union[SetCursorPosition, DispatchClick, ScrollBy, SetDisplayedLabel, ClearDisplayedLabel]

async def ws_broadcast(queue: "asyncio.Queue[str]", host="0.0.0.0", port=8765):
    clients=set()
    async def handler(websocket):
        clients.add(websocket)
        try:
            await websocket.wait_closed()
        finally:
            clients.discard(websocket)
    async def pump():
        while True:
            msg = await queue.get()
            if clients:
                # a client dropping mid-send must not stop the others
                results = await asyncio.gather(*[c.send(msg) for c in list(clients)], return_exceptions=True)
                for r in results:
                    if isinstance(r, Exception): log.debug("ws send failed: %s", r)
    async with websockets.serve(handler, host, port):
        log.info("broadcasting actions on ws://%s:%d", host, port)
        await pump()
