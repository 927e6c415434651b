# src/solitaire/common/rules.py

from typing import Iterable, List, Optional, Sequence

from .cards import Card, Rank
from .constants import COMPLETED_COLUMN_LEN, COMPLETED_COLUMNS_TO_WIN


def can_land(card: Card, column: Sequence[Card]) -> bool:
    # Empty column takes only a King; otherwise build down in alternating colors
    if not column:
        return card.rank == Rank.KING
    top = column[-1]
    return top.is_red != card.is_red and top.rank == card.rank + 1


def can_found(card: Card, slot: int, occupant: Optional[Card]) -> bool:
    # Slot i belongs to suit i and builds up one rank at a time
    if card.suit != slot:
        return False
    if occupant is None:
        return card.rank == Rank.ACE
    return card.rank == occupant.rank + 1


def is_completed_column(column: Sequence[Card]) -> bool:
    if len(column) != COMPLETED_COLUMN_LEN:
        return False
    for i, card in enumerate(column):
        if card.rank != COMPLETED_COLUMN_LEN - i or not card.face_up:
            return False
        if i > 0 and card.is_red == column[i - 1].is_red:
            return False
    return True


def is_game_won(columns: Iterable[Sequence[Card]]) -> bool:
    # Counts ordered King..Ace columns; foundations are not consulted
    completed = sum(1 for column in columns if is_completed_column(column))
    return completed == COMPLETED_COLUMNS_TO_WIN


def foundation_run(occupant: Optional[Card]) -> List[Card]:
    # A slot only exposes its top; the cards beneath are Ace..top of the same suit
    if occupant is None:
        return []
    return [Card(occupant.suit, Rank(r), True) for r in range(Rank.ACE, occupant.rank + 1)]


def all_cards(deck: Sequence[Card], columns: Iterable[Sequence[Card]],
              pile: Sequence[Card], reserves: Iterable[Optional[Card]]) -> List[Card]:
    # Every card on the table, foundations expanded to their full runs
    out = list(deck)
    for column in columns:
        out.extend(column)
    out.extend(pile)
    for occupant in reserves:
        out.extend(foundation_run(occupant))
    return out
