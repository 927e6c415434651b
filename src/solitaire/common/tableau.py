# src/solitaire/common/tableau.py

import random
from typing import List, Optional

from .cards import Card, Deck, Rank, Suit
from .constants import COLUMNS_SIZE, DEALT_CARDS, RESERVE_SLOTS_SIZE
from .errors import require
from .logging_utils import get_logger
from .rules import can_found, can_land, is_game_won
from .savefile import load_game, save_game

log = get_logger("tableau")


class Tableau:
    """
    Full playable state: deck, seven columns, four suit foundations and the pile.

    Rule violations are reported with a False return and never raise.
    Out-of-range indices and drawing from an empty deck are caller bugs and
    raise ContractError.

    Public API:
      - start(), reset(), draw_card(), reshuffle_deck_from_pile()
      - move_card(from_col, to_col, count)
      - move_from_pile_to_column(to_col), move_from_pile_to_reserve(slot)
      - move_from_column_to_reserve(from_col, slot)
      - move_from_reserve_to_column(slot, to_col)
      - save(name), load(name)
      - queries: get_column, get_pile, get_reserve_slot, get_current_card,
        is_deck_empty, is_game_won
    """

    columns_size = COLUMNS_SIZE
    reserve_slot_size = RESERVE_SLOTS_SIZE

    def __init__(self, *, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)
        self.deck = Deck(rng=self._rng)
        self.current_card: Optional[Card] = None
        self.columns: List[List[Card]] = [[] for _ in range(COLUMNS_SIZE)]
        self.pile: List[Card] = []
        self.reserves: List[Optional[Card]] = [None] * RESERVE_SLOTS_SIZE

    # ---------- index contracts ----------
    def _check_column(self, index: int) -> None:
        require(0 <= index < COLUMNS_SIZE, f"column index out of range: {index}")

    def _check_slot(self, index: int) -> None:
        require(0 <= index < RESERVE_SLOTS_SIZE, f"reserve slot out of range: {index}")

    @staticmethod
    def _reveal_top(column: List[Card]) -> None:
        if column and not column[-1].face_up:
            column[-1] = column[-1].face_upped()

    # ---------- lifecycle ----------
    def start(self) -> None:
        require(len(self.deck) >= DEALT_CARDS, f"cannot deal from {len(self.deck)} cards")
        for i in range(COLUMNS_SIZE):
            column = self.columns[i]
            for _ in range(i + 1):
                column.append(self.deck.draw_card())
            column[-1] = column[-1].flipped()
        log.info(f"Dealt {COLUMNS_SIZE} columns, {len(self.deck)} cards left in deck")

    def reset(self) -> None:
        self.deck = Deck(rng=self._rng)
        self.current_card = None
        self.columns = [[] for _ in range(COLUMNS_SIZE)]
        self.reserves = [None] * RESERVE_SLOTS_SIZE
        self.pile = []
        self.start()

    # ---------- queries ----------
    def get_column(self, index: int) -> List[Card]:
        self._check_column(index)
        return self.columns[index]

    def get_pile(self) -> List[Card]:
        return self.pile

    def get_reserve_slot(self, index: int) -> Optional[Card]:
        self._check_slot(index)
        return self.reserves[index]

    def get_current_card(self) -> Optional[Card]:
        return self.current_card

    def get_deck(self) -> Deck:
        return self.deck

    def is_deck_empty(self) -> bool:
        return self.deck.is_empty()

    def is_game_won(self) -> bool:
        return is_game_won(self.columns)

    # ---------- deck / pile ----------
    def draw_card(self) -> bool:
        if self.deck.is_empty():
            log.debug("draw rejected: deck empty")
            return False
        card = self.deck.draw_card().face_upped()
        self.pile.append(card)
        self.current_card = card
        return True

    def reshuffle_deck_from_pile(self) -> bool:
        if not self.deck.is_empty():
            log.debug(f"reshuffle rejected: {len(self.deck)} cards still in deck")
            return False
        self.deck.reshuffle(self.pile)
        self.current_card = None
        log.info(f"Pile recycled into deck ({len(self.deck)} cards)")
        return True

    # ---------- moves ----------
    def move_card(self, from_col: int, to_col: int, count: int) -> bool:
        self._check_column(from_col)
        self._check_column(to_col)

        src = self.columns[from_col]
        dst = self.columns[to_col]

        if count <= 0 or count > len(src):
            log.debug(f"move rejected: count={count} size={len(src)}")
            return False

        # Only the run's bottom card is checked; the run itself is taken as-is
        start_card = src[len(src) - count]
        if not start_card.face_up:
            return False
        if not can_land(start_card, dst):
            return False

        moving = src[len(src) - count:]
        del src[len(src) - count:]
        dst.extend(moving)
        self._reveal_top(src)
        return True

    def move_from_pile_to_column(self, to_col: int) -> bool:
        self._check_column(to_col)

        if not self.pile:
            return False

        card = self.pile[-1]
        column = self.columns[to_col]
        if not can_land(card, column):
            return False

        column.append(card)
        self.pile.pop()
        return True

    def move_from_pile_to_reserve(self, slot: int) -> bool:
        self._check_slot(slot)

        if not self.pile:
            return False

        card = self.pile[-1]
        if not can_found(card, slot, self.reserves[slot]):
            return False

        self.reserves[slot] = card
        self.pile.pop()
        return True

    def move_from_column_to_reserve(self, from_col: int, slot: int) -> bool:
        self._check_column(from_col)
        self._check_slot(slot)

        column = self.columns[from_col]
        if not column:
            return False

        card = column[-1]
        if not card.face_up:
            return False
        if not can_found(card, slot, self.reserves[slot]):
            return False

        self.reserves[slot] = card
        column.pop()
        self._reveal_top(column)
        return True

    def move_from_reserve_to_column(self, slot: int, to_col: int) -> bool:
        self._check_slot(slot)
        self._check_column(to_col)

        card = self.reserves[slot]
        if card is None:
            return False

        column = self.columns[to_col]
        if not can_land(card, column):
            return False

        column.append(card)
        if card.rank != Rank.ACE:
            # the next-lower card of the suit becomes the slot's top
            self.reserves[slot] = Card(card.suit, Rank(card.rank - 1), True)
        else:
            self.reserves[slot] = None
        return True

    # ---------- persistence ----------
    def save(self, name: str, directory: Optional[str] = None) -> bool:
        return save_game(self, name, directory)

    def load(self, name: str, directory: Optional[str] = None) -> bool:
        return load_game(self, name, directory)

    # ---------- developer layout ----------
    def prepare_endgame(self) -> None:
        """
        Near-won layout for trying out the win screen: columns 2-5 hold
        King..Two alternating hearts/spades, the deck holds four Aces.
        Card conservation does not hold in this state.
        """
        for i in (0, 5, 6):
            self.columns[i] = []
        self.pile = []
        self.current_card = None
        self.deck.set_cards([])
        aces = [Card(Suit.HEARTS, Rank.ACE), Card(Suit.HEARTS, Rank.ACE),
                Card(Suit.SPADES, Rank.ACE), Card(Suit.SPADES, Rank.ACE)]
        self.deck.reshuffle(aces)

        for i in range(1, 5):
            red = i % 2 == 1
            column = []
            for rank in range(Rank.KING, Rank.ACE, -1):
                suit = Suit.HEARTS if red else Suit.SPADES
                column.append(Card(suit, Rank(rank), True))
                red = not red
            self.columns[i] = column
        log.info("Developer endgame layout prepared")
