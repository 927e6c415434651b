# src/solitaire/console/watcher.py

import threading
from typing import Callable, Tuple

from solitaire.common.constants import RESIZE_POLL_SEC
from solitaire.common.logging_utils import get_logger

log = get_logger("console.watcher")


def watch_resize(
    get_size: Callable[[], Tuple[int, int]],
    redraw: Callable[[], None],
    lock: threading.Lock,
    stop_event: threading.Event,
    paused: threading.Event,
    poll_sec: float = RESIZE_POLL_SEC,
) -> None:
    """
    Poll the terminal size and redraw under `lock` when it changes.
    Never touches game state; only the render path is shared with the main loop.
    Runs until stop_event is set. While `paused` is set (menu on screen)
    size changes are remembered but no redraw happens.
    """
    last = get_size()
    while not stop_event.is_set():
        size = get_size()
        if size != last and not paused.is_set():
            with lock:
                log.debug(f"terminal resized {last} -> {size}")
                try:
                    redraw()
                except OSError as e:
                    log.warning(f"redraw after resize failed: {e}")
            last = size
        elif paused.is_set():
            last = size
        stop_event.wait(poll_sec)


def start_resize_watcher(
    get_size: Callable[[], Tuple[int, int]],
    redraw: Callable[[], None],
    lock: threading.Lock,
    stop_event: threading.Event,
    paused: threading.Event,
    poll_sec: float = RESIZE_POLL_SEC,
) -> threading.Thread:
    t = threading.Thread(
        target=watch_resize,
        args=(get_size, redraw, lock, stop_event, paused, poll_sec),
        daemon=True,
        name="resize-watcher",
    )
    t.start()
    return t
