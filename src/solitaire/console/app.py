# src/solitaire/console/app.py

import threading
from typing import Callable, Optional

from solitaire.common.constants import DEBUG_ENDGAME, LATEST_SAVE, SAVE_DIR, SEED
from solitaire.common.logging_utils import LOG_FILE, get_logger, setup_logging
from solitaire.common.tableau import Tableau

from .cardfx.board import draw_board
from .cardfx.celebrate import celebrate
from .cardfx.terminal import TerminalRenderer
from .commands import CommandInterpreter
from .menu import MainMenu
from .watcher import start_resize_watcher

log = get_logger("console.app")

WELCOME = 'Type a command to play, or "help" to list them'
PROMPT = "command: "


class ConsoleApp:
    """
    Owns the render/input loop. One command per line, autosave after each,
    and a resize watcher thread that only redraws under the shared lock.
    """

    def __init__(
        self,
        tableau: Tableau,
        renderer: Optional[TerminalRenderer] = None,
        *,
        save_dir: Optional[str] = None,
        input_fn: Callable[[str], str] = input,
        intro_frames: int = 20,
        celebrate_fn: Callable[[TerminalRenderer], None] = celebrate,
        debug_endgame: bool = False,
    ) -> None:
        self.tableau = tableau
        self.renderer = renderer or TerminalRenderer(clear_each_frame=True)
        self.save_dir = save_dir
        self.input_fn = input_fn
        self.celebrate_fn = celebrate_fn
        self.debug_endgame = debug_endgame
        self.interpreter = CommandInterpreter(tableau, save_dir)
        self.menu = MainMenu(tableau, self.renderer, save_dir=save_dir,
                             input_fn=input_fn, intro_frames=intro_frames)
        self.status = WELCOME

        self.draw_lock = threading.Lock()
        self.stop_event = threading.Event()
        self.in_menu = threading.Event()
        self._watcher: Optional[threading.Thread] = None

    # ---------- drawing ----------
    def draw(self) -> None:
        canvas = draw_board(self.tableau)
        self.renderer.draw_canvas(canvas)
        if self.status:
            self.renderer.write(self.status + "\n")
        self.renderer.flush()

    def _redraw_with_prompt(self) -> None:
        self.draw()
        self.renderer.write(PROMPT)
        self.renderer.flush()

    # ---------- phases ----------
    def _enter_menu(self) -> bool:
        self.in_menu.set()
        try:
            ready = self.menu.run()
        finally:
            self.in_menu.clear()
        if ready:
            if self.debug_endgame:
                self.tableau.prepare_endgame()
            self.status = WELCOME
        return ready

    def _ask_new_game(self) -> bool:
        answer = self.input_fn("Game won! Start a new one? yes/no: ").strip().lower()
        return answer in ("yes", "y")

    def _autosave(self) -> None:
        if not self.tableau.save(LATEST_SAVE, self.save_dir):
            log.warning("autosave failed")

    def run(self) -> None:
        self.renderer.begin()
        try:
            if not self._enter_menu():
                return

            self._watcher = start_resize_watcher(
                self.renderer.get_size, self._redraw_with_prompt,
                self.draw_lock, self.stop_event, self.in_menu,
            )

            while True:
                with self.draw_lock:
                    self.draw()

                if self.tableau.is_game_won():
                    log.info("Game won")
                    with self.draw_lock:
                        self.celebrate_fn(self.renderer)
                    if not self._ask_new_game():
                        break
                    self.tableau.reset()
                    self.status = WELCOME
                    continue

                try:
                    line = self.input_fn(PROMPT)
                except EOFError:
                    break

                with self.draw_lock:
                    result = self.interpreter.handle(line)
                    self._autosave()
                if result.quit:
                    break
                if result.menu:
                    if not self._enter_menu():
                        break
                    continue
                self.status = result.message
        finally:
            self.stop_event.set()
            if self._watcher is not None:
                self._watcher.join()
            self.renderer.end()


def main() -> None:
    setup_logging(filename=LOG_FILE or "solitaire.log")
    tableau = Tableau(seed=SEED)
    app = ConsoleApp(tableau, save_dir=SAVE_DIR, debug_endgame=DEBUG_ENDGAME)
    try:
        app.run()
    except KeyboardInterrupt:
        log.info("Interrupted, shutting down...")


if __name__ == "__main__":
    main()
