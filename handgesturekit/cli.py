from __future__ import annotations
import typer, json, asyncio, logging
from rich.console import Console
from rich.logging import RichHandler
from pathlib import Path
from typing import Iterator, Dict, Any, List, Optional
from .config import load_config, dump_config
from .hand.observation import DetectorResult
from .runtime.dispatch import HeadlessHost
from .runtime.errors import DetectorInitError
from .runtime.events import Action
from .runtime.session import Session, run_with_broadcast

app = typer.Typer(add_completion=False, help="HandGestureKit CLI (hgk)")
console = Console(soft_wrap=True)
log = logging.getLogger("handgesturekit")

def _setup_logging(level: str):
    logging.basicConfig(level=level.upper(), format="%(message)s", datefmt="[%X]",
                        handlers=[RichHandler(rich_tracebacks=True, show_path=False)], force=True)

def _emit(actions: List[Action]):
    for a in actions:
        console.print(a.model_dump_json(), markup=False, highlight=False, emoji=False)

@app.command()
def run(config: Optional[Path]=typer.Option(None, "--config", "-c", help="YAML config file"),
        camera: Optional[int]=typer.Option(None, help="camera index (overrides config)"),
        ws: bool=typer.Option(False, help="broadcast actions over WebSocket"),
        port: int=typer.Option(8765),
        print_actions: bool=typer.Option(True, "--print-actions/--no-print-actions"),
        log_level: str=typer.Option("INFO")):
    """
    Live session: webcam -> gestures -> desktop pointer. Ctrl+C to stop.
    """
    _setup_logging(log_level)
    cfg = load_config(config, camera=camera)
    from .io.camera import frames
    from .hand.landmarks import HandLandmarks
    from .demos.mouse import DesktopHost

    queue: Optional["asyncio.Queue[str]"] = None
    async def on_actions(actions: List[Action]):
        if print_actions: _emit(actions)
        if queue is not None:
            for a in actions: await queue.put(a.model_dump_json())

    factory = lambda: HandLandmarks(cfg.model_path, num_hands=cfg.num_hands, model_url=cfg.model_url)
    session = Session(factory, DesktopHost(cfg.scroll_scale), cfg, on_actions=on_actions)

    async def main():
        nonlocal queue
        await session.start()
        source = frames(cfg.camera, cfg.width, cfg.height)
        if ws:
            # created here so it belongs to the running loop
            queue = asyncio.Queue()
            await run_with_broadcast(session, source, queue, "0.0.0.0", port)
        else:
            await session.run(source)

    try:
        asyncio.run(main())
    except (DetectorInitError, OSError) as e:
        log.error("%s", e)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        pass
    finally:
        session.close()

def _recorded(path: Path) -> Iterator[Dict[str,Any]]:
    with open(path, "r") as f:
        for n, line in enumerate(f, 1):
            line = line.strip()
            if not line: continue
            try:
                res = DetectorResult.from_dict(json.loads(line))
            except (ValueError, KeyError, TypeError) as e:
                log.warning("%s:%d: bad record skipped (%s)", path, n, e)
                continue
            yield {"image": res, "meta": {"ts_ms": res.timestamp_ms}}

@app.command()
def replay(file: Path=typer.Argument(..., exists=True, dir_okay=False, help="JSONL of recorded detector results"),
           config: Optional[Path]=typer.Option(None, "--config", "-c"),
           width: int=typer.Option(1280), height: int=typer.Option(720),
           log_level: str=typer.Option("WARNING")):
    """
    Run recorded landmark frames through the pipeline and print the actions as JSONL.
    """
    _setup_logging(log_level)
    cfg = load_config(config)
    host = HeadlessHost(width, height)
    # the recorded result stands in for the detector output
    session = Session(lambda: (lambda res, ts: res), host, cfg, on_actions=_emit)
    asyncio.run(session.run(_recorded(file), paced=False))

@app.command()
def detect(image: Path=typer.Argument(..., exists=True, dir_okay=False),
           config: Optional[Path]=typer.Option(None, "--config", "-c")):
    """
    Recognise the gesture in a single image.
    """
    import cv2
    from .hand.landmarks import HandLandmarks
    cfg = load_config(config)
    frame = cv2.imread(str(image))
    if frame is None:
        console.print(f"[red]Cannot read image[/red] {image}")
        raise typer.Exit(1)
    try:
        rec = HandLandmarks(cfg.model_path, num_hands=cfg.num_hands, mode="image", model_url=cfg.model_url)
    except DetectorInitError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    res = rec.recognize(frame); rec.close()
    if not res.hands:
        console.print("no hand detected"); return
    h = res.hands[0]
    console.print(f"GestureRecognizer: {h.category}\n Confidence: {h.score*100:.2f}%\n Handedness: {h.handedness}", markup=False)

@app.command("config")
def show_config(config: Optional[Path]=typer.Option(None, "--config", "-c")):
    """
    Print the effective configuration.
    """
    console.print(dump_config(load_config(config)), markup=False, highlight=False)

if __name__ == "__main__":
    app()
