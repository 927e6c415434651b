# cardfx/celebrate.py
from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import List, Tuple

from .terminal import TerminalRenderer

ANSI_RESET = "\x1b[0m"
ANSI_BOLD_GREEN = "\x1b[1;32m"

# A few bright/confetti colors (foreground)
CONFETTI_COLORS = [
    "\x1b[1;31m",  # red
    "\x1b[1;32m",  # green
    "\x1b[1;33m",  # yellow
    "\x1b[1;34m",  # blue
    "\x1b[1;35m",  # magenta
    "\x1b[1;36m",  # cyan
    "\x1b[1;37m",  # white
]
CONFETTI_CHARS = ["*", "+", "•", "·", "x", "o", "♥", "♦", "♣", "♠"]

# 7x7 bitmap patterns (1 = filled)
WIN_PATTERNS = {
    "W": [
        "1000001",
        "1000001",
        "1000001",
        "1001001",
        "1010101",
        "1100011",
        "1000001",
    ],
    "I": [
        "1111111",
        "0011100",
        "0011100",
        "0011100",
        "0011100",
        "0011100",
        "1111111",
    ],
    "N": [
        "1000001",
        "1100001",
        "1110001",
        "1011001",
        "1001101",
        "1000111",
        "1000001",
    ],
}


@dataclass
class CelebrateConfig:
    duration_s: float = 4.0
    fps: int = 30
    intensity: int = 140


def scale_bitmap(rows: List[str], scale: int) -> List[str]:
    out: List[str] = []
    for r in rows:
        scaled_row = "".join(("█" * scale) if c == "1" else (" " * scale) for c in r)
        for _ in range(scale):
            out.append(scaled_row)
    return out


def compose_big_word(term_w: int, term_h: int, word: str) -> Tuple[List[str], int, int]:
    """
    Compose a big word from 7x7 bitmaps; returns (lines, x, y) centred on screen.
    """
    max_h = max(7, term_h - 2)
    scale = max(1, min(4, (max_h // 9)))

    letters = [scale_bitmap(WIN_PATTERNS[ch], scale) for ch in word if ch in WIN_PATTERNS]
    if not letters:
        return [], 0, 0

    gap = " " * max(2, scale)
    lines = [gap.join(letter[row] for letter in letters) for row in range(len(letters[0]))]

    art_w = max(len(line) for line in lines)
    x = max(0, (term_w // 2) - (art_w // 2))
    y = max(0, (term_h // 2) - (len(lines) // 2) - 1)
    return lines, x, y


def celebrate(r: TerminalRenderer, cfg: CelebrateConfig = CelebrateConfig()) -> None:
    """
    Full-screen WIN overlay: a huge green 'WIN' with confetti around it.
    Blocks for cfg.duration_s seconds.
    """
    term_w, term_h = r.get_size()
    art_lines, art_x, art_y = compose_big_word(term_w, term_h, "WIN")
    art_w = max((len(s) for s in art_lines), default=0)
    box = (art_x, art_x + art_w, art_y, art_y + len(art_lines))

    start = time.time()
    dt = 1.0 / max(1, cfg.fps)
    while time.time() - start < cfg.duration_s:
        if r.clear_each_frame:
            r.clear()

        for _ in range(cfg.intensity):
            # keep most of the confetti outside the word
            for __ in range(3):
                x = random.randint(0, max(0, term_w - 1))
                y = random.randint(0, max(0, term_h - 2))
                if not (box[0] <= x < box[1] and box[2] <= y < box[3]):
                    break
            r.move(y + 1, x + 1)
            r.write(random.choice(CONFETTI_COLORS) + random.choice(CONFETTI_CHARS) + ANSI_RESET)

        for i, line in enumerate(art_lines):
            yy = art_y + i
            if 0 <= yy < term_h:
                r.move(yy + 1, art_x + 1)
                r.write(ANSI_BOLD_GREEN + line + ANSI_RESET)

        r.flush()
        time.sleep(dt)

    if r.clear_each_frame:
        r.clear()
    r.flush()
