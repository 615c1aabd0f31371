from __future__ import annotations
import logging
from typing import Optional, Tuple
import pyautogui
from ..runtime.events import DisplayLabel

log = logging.getLogger(__name__)

class DesktopHost:
    """
    UIHost backed by the real mouse pointer. The pointer is the indicator and
    whatever sits under it is the click target.
    """
    def __init__(self, scroll_scale: float = 1.0):
        pyautogui.FAILSAFE = False
        self.scroll_scale = scroll_scale
        self._label: Optional[str] = None

    def viewport_size(self) -> Tuple[int,int]:
        w,h = pyautogui.size()
        return int(w), int(h)

    def move_indicator(self, x: float, y: float) -> None:
        pyautogui.moveTo(int(x), int(y), duration=0.0)

    def indicator_center(self) -> Tuple[float,float]:
        x,y = pyautogui.position()
        return float(x), float(y)

    def element_at(self, x: float, y: float):
        return (int(x), int(y))

    def activate(self, element) -> None:
        x,y = element
        pyautogui.click(x, y)

    def scroll_by(self, dx: float, dy: float) -> None:
        # pyautogui: positive scroll is up, positive hscroll is right
        if dy:
            clicks = int(round(-dy * self.scroll_scale))
            if clicks: pyautogui.scroll(clicks)
        if dx:
            clicks = int(round(dx * self.scroll_scale))
            if clicks: pyautogui.hscroll(clicks)

    def show_label(self, label: DisplayLabel) -> None:
        text = label.text()
        if text != self._label:
            log.info(text.replace("\n", " |"))
            self._label = text

    def hide_label(self) -> None:
        if self._label is not None: log.info("no gesture")
        self._label = None
