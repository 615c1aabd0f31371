from __future__ import annotations
import logging
from typing import Any, List, Optional, Protocol, Tuple
from ..config import GestureConfig
from .events import (Action, ClearDisplayedLabel, DispatchClick, DisplayLabel, GestureEvent,
                     ScrollBy, SetCursorPosition, SetDisplayedLabel)

log = logging.getLogger(__name__)

class UIHost(Protocol):
    """What the dispatcher needs from the surrounding UI. Nothing else touches it."""
    def viewport_size(self) -> Tuple[int,int]: ...
    def move_indicator(self, x: float, y: float) -> None: ...
    def indicator_center(self) -> Tuple[float,float]: ...
    def element_at(self, x: float, y: float) -> Optional[Any]: ...
    def activate(self, element: Any) -> None: ...
    def scroll_by(self, dx: float, dy: float) -> None: ...
    def show_label(self, label: DisplayLabel) -> None: ...
    def hide_label(self) -> None: ...

class ActionDispatcher:
    def __init__(self, host: UIHost, cfg: Optional[GestureConfig]=None):
        self.host = host
        self.cfg = cfg or GestureConfig()

    def to_pixels(self, pos: Tuple[float,float]) -> Tuple[float,float]:
        # camera image is mirrored relative to the user
        w,h = self.host.viewport_size()
        x,y = pos
        return (1 - x) * w, y * h

    def dispatch(self, ev: GestureEvent) -> List[Action]:
        out: List[Action] = []
        if ev.kind in ("cursor","click") and ev.pos is not None:
            x,y = self.to_pixels(ev.pos)
            self.host.move_indicator(x, y)
            out.append(SetCursorPosition(x=x, y=y))
        if ev.kind == "click":
            a = self._click()
            if a: out.append(a)
        elif ev.kind in ("scroll_horizontal","scroll_vertical"):
            out.append(self._scroll(ev))
        out.append(self._label(ev.label))
        return out

    def _click(self) -> Optional[DispatchClick]:
        cx,cy = self.host.indicator_center()
        target = self.host.element_at(cx, cy)
        if target is None: return None
        self.host.activate(target)
        log.debug("clicked %r at (%.0f, %.0f)", target, cx, cy)
        return DispatchClick(x=cx, y=cy)

    def _scroll(self, ev: GestureEvent) -> ScrollBy:
        w,h = self.host.viewport_size()
        damp = self.cfg.scroll_damping
        if ev.kind == "scroll_horizontal":
            dx, dy = ev.amount * w * damp, 0.0
        else:
            dx, dy = 0.0, ev.amount * h * damp
        self.host.scroll_by(dx, dy)
        log.debug("scroll %s by (%.1f, %.1f)", "right/down" if (dx+dy) > 0 else "left/up", dx, dy)
        return ScrollBy(dx=dx, dy=dy)

    def _label(self, label: Optional[DisplayLabel]):
        if label is None:
            self.host.hide_label()
            return ClearDisplayedLabel()
        self.host.show_label(label)
        return SetDisplayedLabel(**label.model_dump())

class HeadlessHost:
    """In-memory UIHost for replays: fixed viewport, records every effect."""
    def __init__(self, width:int=1280, height:int=720, elements=None):
        self.size = (width, height)
        self.indicator = (width / 2, height / 2)
        self.scroll = (0.0, 0.0)
        self.label: Optional[DisplayLabel] = None
        self.clicked: List[Any] = []
        # element_at(x, y) callback; default: the point itself
        self._elements = elements or (lambda x, y: (x, y))

    def viewport_size(self): return self.size
    def move_indicator(self, x, y): self.indicator = (x, y)
    def indicator_center(self): return self.indicator
    def element_at(self, x, y): return self._elements(x, y)
    def activate(self, element): self.clicked.append(element)
    def scroll_by(self, dx, dy): self.scroll = (self.scroll[0] + dx, self.scroll[1] + dy)
    def show_label(self, label): self.label = label
    def hide_label(self): self.label = None
