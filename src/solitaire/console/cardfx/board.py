# board.py
from __future__ import annotations
from typing import Optional

from solitaire.common.cards import Suit
from solitaire.common.tableau import Tableau

from .sprites import CARD_H, CARD_W, card_lines, deck_stack, empty_slot, put_segments
from .terminal import Canvas, CARD_BLACK, TABLE, TABLE_LABEL, SLOT_INNER, SLOT_OUTER

LEFT_X = 2
COLUMNS_X = 20
COLUMN_STEP = CARD_W + 1
OVERLAP_ROWS = 3
SLOT_W = CARD_W + 2


def draw_board(tableau: Tableau, canvas: Optional[Canvas] = None) -> Canvas:
    """
    Lay out the whole table:
      - deck and the drawn pile on the left
      - seven numbered columns, covered cards show their top three rows
      - four framed foundation slots on the right
    """
    canvas = canvas or Canvas(background=TABLE)

    # Deck (drawn only while it holds cards) and pile
    y = 1
    if not tableau.is_deck_empty():
        canvas.put_sprite(LEFT_X, y, deck_stack(), CARD_BLACK)
    y += CARD_H + 1
    pile = tableau.get_pile()
    for i, card in enumerate(pile):
        covered = i < len(pile) - 1
        rows = OVERLAP_ROWS if covered else CARD_H
        put_segments(canvas, LEFT_X, y, card_lines(card), rows=rows)
        y += rows

    # Columns
    x = COLUMNS_X
    for i in range(tableau.columns_size):
        canvas.put(x + 4, 0, str(i + 1), TABLE_LABEL)
        column = tableau.get_column(i)
        y = 1
        for j, card in enumerate(column):
            covered = j < len(column) - 1
            rows = OVERLAP_ROWS if covered else CARD_H
            put_segments(canvas, x, y, card_lines(card), rows=rows)
            y += rows
        x += COLUMN_STEP

    _draw_foundations(tableau, canvas, x + CARD_W)
    return canvas


def _draw_foundations(tableau: Tableau, canvas: Canvas, x: int) -> None:
    y = 1
    canvas.put(x - 1, y, " " * (SLOT_W + 2), SLOT_OUTER)
    y += 1
    for slot in range(tableau.reserve_slot_size):
        canvas.put(x, y, " " * SLOT_W, SLOT_INNER)
        canvas.put(x, y + CARD_H + 1, " " * SLOT_W, SLOT_INNER)
        for dy in range(CARD_H + 2):
            canvas.put(x - 1, y + dy, " ", SLOT_OUTER)
            canvas.put(x + SLOT_W, y + dy, " ", SLOT_OUTER)
        for dy in range(1, CARD_H + 1):
            canvas.put(x, y + dy, " ", SLOT_INNER)
            canvas.put(x + SLOT_W - 1, y + dy, " ", SLOT_INNER)
        canvas.put(x + SLOT_W + 2, y + 3, str(slot + 1), TABLE_LABEL)

        card = tableau.get_reserve_slot(slot)
        lines = empty_slot(Suit(slot)) if card is None else card_lines(card)
        put_segments(canvas, x + 1, y + 1, lines)
        y += CARD_H + 1
    canvas.put(x - 1, y + 1, " " * (SLOT_W + 2), SLOT_OUTER)
