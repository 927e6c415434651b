# src/solitaire/common/cards.py

import random
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, Optional

from .errors import require


class Suit(IntEnum):
    # Value doubles as the reserve slot index and the save-file code
    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self]


class Rank(IntEnum):
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    @property
    def label(self) -> str:
        return RANK_LABELS.get(self, str(int(self)))


SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}
RANK_LABELS = {Rank.ACE: "A", Rank.JACK: "J", Rank.QUEEN: "Q", Rank.KING: "K"}


@dataclass(frozen=True)
class Card:
    suit: Suit
    rank: Rank
    face_up: bool = False

    @property
    def is_red(self) -> bool:
        return self.suit.is_red

    @property
    def label(self) -> str:
        return self.rank.label + self.suit.symbol

    def flipped(self) -> "Card":
        return replace(self, face_up=not self.face_up)

    def face_upped(self) -> "Card":
        return self if self.face_up else replace(self, face_up=True)

    def face_down(self) -> "Card":
        return replace(self, face_up=False) if self.face_up else self

    def same_card(self, other: "Card") -> bool:
        return self.suit == other.suit and self.rank == other.rank

    def __str__(self) -> str:
        return self.label if self.face_up else f"[{self.label}]"


def full_deck() -> List[Card]:
    return [Card(suit, rank) for suit in Suit for rank in Rank]


class Deck:
    """Ordered stack of cards; the last element is the top and is drawn first."""

    def __init__(self, *, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)
        self._cards: List[Card] = []
        self.reset()

    @property
    def cards(self) -> List[Card]:
        return self._cards

    def set_cards(self, cards: List[Card]) -> None:
        self._cards = list(cards)

    def __len__(self) -> int:
        return len(self._cards)

    def is_empty(self) -> bool:
        return not self._cards

    def reset(self) -> None:
        self._cards = full_deck()
        self.shuffle()

    def shuffle(self) -> None:
        self._rng.shuffle(self._cards)

    def draw_card(self) -> Card:
        require(not self.is_empty(), "draw_card on an empty deck")
        return self._cards.pop()

    def reshuffle(self, pile: List[Card]) -> None:
        """
        Recycle the played pile into a fresh deck.
        The given list is emptied in place; its cards come back face-down.
        """
        require(self.is_empty(), "reshuffle while the deck still holds cards")
        self._cards = [card.face_down() for card in pile]
        pile.clear()
        self.shuffle()
