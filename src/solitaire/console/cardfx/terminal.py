# terminal.py
from __future__ import annotations
import colorsys
import sys
from dataclasses import dataclass
from typing import List, Tuple, Optional

CSI = "\033["


@dataclass(frozen=True)
class Style:
    prefix: str = ""


RGB = Tuple[int, int, int]


def rgb_fg(color: RGB) -> str:
    return f"{CSI}38;2;{color[0]};{color[1]};{color[2]}m"


def rgb_both(fg: RGB, bg: RGB) -> Style:
    return Style(prefix=f"{CSI}38;2;{fg[0]};{fg[1]};{fg[2]};48;2;{bg[0]};{bg[1]};{bg[2]}m")


def rainbow(tick: int, speed: int = 100, saturation: float = 1.0, brightness: float = 1.0) -> RGB:
    hue = (tick % speed) / speed
    r, g, b = colorsys.hsv_to_rgb(hue, saturation, brightness)
    return int(r * 255), int(g * 255), int(b * 255)


# Basic styles
RESET = Style(prefix=CSI + "0m")

# Table palette
WHITE = (245, 247, 250)
BLACK = (0, 0, 0)
RED = (255, 0, 0)
GREEN = (52, 162, 73)
DARK_GREEN = (31, 97, 44)
LIGHT_GREEN = (42, 130, 58)

CARD_BLACK = rgb_both(BLACK, WHITE)         # card body, black suits
CARD_RED = rgb_both(RED, WHITE)             # hearts/diamonds
TABLE = rgb_both(BLACK, GREEN)              # background
TABLE_LABEL = rgb_both(WHITE, GREEN)        # column/slot numbers
SLOT_INNER = rgb_both(WHITE, DARK_GREEN)    # foundation frame
SLOT_OUTER = rgb_both(WHITE, LIGHT_GREEN)


@dataclass
class Sprite:
    lines: List[str]


class Canvas:
    """
    Cell grid that remembers a style per character and grows on demand.
    Rows are emitted with a style change only where the style differs.
    """

    def __init__(self, background: Style = RESET) -> None:
        self.background = background
        self._rows: List[List[Tuple[str, Style]]] = []

    @property
    def height(self) -> int:
        return len(self._rows)

    @property
    def width(self) -> int:
        return max((len(r) for r in self._rows), default=0)

    def put(self, x: int, y: int, text: str, style: Optional[Style] = None) -> None:
        if x < 0 or y < 0:
            return
        style = style or self.background
        while len(self._rows) <= y:
            self._rows.append([])
        row = self._rows[y]
        while len(row) < x + len(text):
            row.append((" ", self.background))
        for i, ch in enumerate(text):
            row[x + i] = (ch, style)

    def put_sprite(self, x: int, y: int, sprite: Sprite, style: Optional[Style] = None) -> None:
        for row, line in enumerate(sprite.lines):
            self.put(x, y + row, line, style)

    def char_at(self, x: int, y: int) -> str:
        if y >= len(self._rows) or x >= len(self._rows[y]):
            return " "
        return self._rows[y][x][0]

    def plain_lines(self) -> List[str]:
        return ["".join(ch for ch, _ in row) for row in self._rows]

    def render(self, width: Optional[int] = None) -> str:
        width = width if width is not None else self.width
        out = []
        for row in self._rows:
            line = []
            current: Optional[Style] = None
            for ch, style in row[:width]:
                if style is not current:
                    line.append(style.prefix)
                    current = style
                line.append(ch)
            pad = width - min(len(row), width)
            if pad > 0:
                line.append(self.background.prefix + " " * pad)
            line.append(CSI + "0m")
            out.append("".join(line))
        return "\n".join(out)


class TerminalRenderer:
    def __init__(self, *, clear_each_frame: bool = True):
        self.clear_each_frame = clear_each_frame
        self._hidden_cursor = False

    def write(self, text: str) -> None:
        sys.stdout.write(text)

    def hide_cursor(self) -> None:
        if not self._hidden_cursor:
            sys.stdout.write(CSI + "?25l")
            self._hidden_cursor = True

    def show_cursor(self) -> None:
        if self._hidden_cursor:
            sys.stdout.write(CSI + "?25h")
            self._hidden_cursor = False

    def clear(self) -> None:
        # home + clear
        sys.stdout.write(CSI + "H" + CSI + "2J")

    def move(self, row_1: int, col_1: int) -> None:
        sys.stdout.write(f"{CSI}{row_1};{col_1}H")

    def flush(self) -> None:
        sys.stdout.flush()

    def get_size(self) -> Tuple[int, int]:
        # Lazy import to keep module small
        import shutil
        s = shutil.get_terminal_size(fallback=(80, 24))
        return s.columns, s.lines

    def begin(self) -> None:
        self.hide_cursor()
        sys.stdout.write(CSI + "0m")
        if self.clear_each_frame:
            self.clear()
        self.flush()

    def end(self) -> None:
        self.show_cursor()
        sys.stdout.write(CSI + "0m\n")
        self.flush()

    def draw_canvas(self, canvas: Canvas) -> None:
        term_w, _ = self.get_size()
        if self.clear_each_frame:
            self.clear()
        self.move(1, 1)
        sys.stdout.write(canvas.render(min(term_w, max(canvas.width, 1))))
        sys.stdout.write("\n")
        self.flush()
