# sprites.py
from __future__ import annotations
from typing import List, Tuple

from solitaire.common.cards import Card, Suit

from .terminal import Canvas, Sprite, Style, CARD_BLACK, CARD_RED

CARD_W = 9
CARD_H = 5
INNER_W = CARD_W - 2

# (text, style) segments, one list per line
Segments = List[Tuple[str, Style]]


def _style_for(card_is_red: bool) -> Style:
    return CARD_RED if card_is_red else CARD_BLACK


def card_face(card: Card) -> List[Segments]:
    rank = card.rank.label
    suit = card.suit.symbol
    color = _style_for(card.is_red)
    pad = INNER_W - len(rank)
    return [
        [("┌" + "─" * INNER_W + "┐", CARD_BLACK)],
        [("│", CARD_BLACK), (rank, color), (" " * pad + "│", CARD_BLACK)],
        [("│" + " " * 3, CARD_BLACK), (suit, color), (" " * 3 + "│", CARD_BLACK)],
        [("│" + " " * pad, CARD_BLACK), (rank, color), ("│", CARD_BLACK)],
        [("└" + "─" * INNER_W + "┘", CARD_BLACK)],
    ]


def card_back() -> Sprite:
    top = "┌" + "─" * INNER_W + "┐"
    bot = "└" + "─" * INNER_W + "┘"
    return Sprite([top] + ["│" + "░" * INNER_W + "│"] * (CARD_H - 2) + [bot])


def empty_slot(suit: Suit) -> List[Segments]:
    color = _style_for(suit.is_red)
    return [
        [("┌" + "─" * INNER_W + "┐", CARD_BLACK)],
        [("│" + " " * 3, CARD_BLACK), (suit.symbol, color), (" " * 3 + "│", CARD_BLACK)],
        [("│" + " " * INNER_W + "│", CARD_BLACK)],
        [("│" + " " * INNER_W + "│", CARD_BLACK)],
        [("└" + "─" * INNER_W + "┘", CARD_BLACK)],
    ]


def deck_stack() -> Sprite:
    return Sprite([
        "╔═══════╗",
        "║ / / / ║",
        "║/ / / /║",
        "║ / / / ║",
        "╚═══════╝",
    ])


def card_lines(card: Card) -> List[Segments]:
    if not card.face_up:
        return [[(line, CARD_BLACK)] for line in card_back().lines]
    return card_face(card)


def put_segments(canvas: Canvas, x: int, y: int, lines: List[Segments], *, rows: int = CARD_H) -> None:
    """Draw the first `rows` lines of a sprite; covered cards show only their top."""
    for dy, segments in enumerate(lines[:rows]):
        xx = x
        for text, style in segments:
            canvas.put(xx, y + dy, text, style)
            xx += len(text)
