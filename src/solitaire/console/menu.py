# src/solitaire/console/menu.py

import time
from typing import Callable, List, Optional

from solitaire.common.constants import LATEST_SAVE, MENU_FRAME_SEC
from solitaire.common.logging_utils import get_logger
from solitaire.common.savefile import is_valid_save_name, load_game, save_exists
from solitaire.common.tableau import Tableau

from .cardfx.terminal import Canvas, Style, TerminalRenderer, rainbow, rgb_fg

log = get_logger("console.menu")

LOGO = [
    r" __   __        ___       __   ___ ",
    r"/__` /  \ |    |  |   /\  |  |__) |__  ",
    r".__/ \__/ |___ |  |  /~~\ | |  \ |___ ",
]


class SaturationPulse:
    """Saturation bouncing between 0.5 and 0.9 in 0.01 steps."""

    def __init__(self) -> None:
        self.value = 0.9
        self._up = False

    def step(self) -> float:
        if self.value > 0.9:
            self._up = False
        if self.value < 0.5:
            self._up = True
        self.value += 0.01 if self._up else -0.01
        return self.value


def render_menu(lines: List[str], tick: int, saturation: float) -> Canvas:
    canvas = Canvas()
    for row, text in enumerate(lines):
        for col, ch in enumerate(text):
            color = rainbow(tick + col * 2, 50, saturation)
            canvas.put(col, row, ch, Style(prefix=rgb_fg(color)))
    return canvas


class MainMenu:
    """
    Title screen: new game, load a named save, or resume the autosave.
    run() returns True once a game is ready to play, False to quit.
    """

    def __init__(
        self,
        tableau: Tableau,
        renderer: TerminalRenderer,
        *,
        save_dir: Optional[str] = None,
        input_fn: Callable[[str], str] = input,
        intro_frames: int = 20,
    ) -> None:
        self.tableau = tableau
        self.renderer = renderer
        self.save_dir = save_dir
        self.input_fn = input_fn
        self.intro_frames = intro_frames
        self._pulse = SaturationPulse()
        self._tick = 0

    def _lines(self, latest_found: bool) -> List[str]:
        lines = LOGO + ["", "Choose an option:", "1. New game", "2. Load game"]
        if latest_found:
            lines.append("3. Resume last game")
        lines.append('Type "quit" to leave')
        return lines

    def _frame(self, lines: List[str], message: str) -> None:
        self._tick = (self._tick + 1) % 100
        canvas = render_menu(lines, self._tick, self._pulse.step())
        if message:
            canvas.put(0, canvas.height, message)
        self.renderer.draw_canvas(canvas)

    def _animate(self, lines: List[str], message: str) -> None:
        for _ in range(self.intro_frames):
            self._frame(lines, message)
            time.sleep(MENU_FRAME_SEC)
        self._frame(lines, message)

    def _load_named(self) -> Optional[str]:
        """Returns None once a save was loaded, else a message for the menu."""
        name = self.input_fn('Save name (or "back"): ').strip()
        if name == "back":
            return ""
        if not is_valid_save_name(name):
            return "The name contains characters that are not allowed"
        if not save_exists(name, self.save_dir):
            return "No such save"
        if not load_game(self.tableau, name, self.save_dir):
            return "Could not read the save file"
        return None

    def run(self) -> bool:
        message = ""
        while True:
            latest_found = save_exists(LATEST_SAVE, self.save_dir)
            lines = self._lines(latest_found)
            self._animate(lines, message)

            choice = self.input_fn("> ").strip()
            if choice in ("quit", "exit"):
                return False
            try:
                num = int(choice)
            except ValueError:
                message = "That is not a number"
                continue
            if num < 1 or num > (3 if latest_found else 2):
                message = "No such option"
                continue

            if num == 1:
                self.tableau.reset()
                log.info("Menu: new game")
                return True
            if num == 2:
                outcome = self._load_named()
                if outcome is None:
                    return True
                message = outcome
                continue
            if load_game(self.tableau, LATEST_SAVE, self.save_dir):
                log.info("Menu: resumed last game")
                return True
            message = "Could not read the last game"
