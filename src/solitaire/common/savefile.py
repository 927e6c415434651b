# src/solitaire/common/savefile.py

import logging
import os
import struct
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from .cards import Card, Rank, Suit
from .constants import (
    MAGIC, MAGIC_LEN,
    COUNT_FMT, CARD_FMT, COUNT_LEN, CARD_LEN,
    COLUMNS_SIZE, RESERVE_SLOTS_SIZE,
    SAVE_EXT, SAVE_DIR,
    ILLEGAL_NAME_CHARS, MAX_NAME_LEN,
)
from .logging_utils import get_logger, log_record

if TYPE_CHECKING:
    from .tableau import Tableau

_log = get_logger("savefile")

# One writer or reader at a time per process
_io_lock = threading.Lock()


# -------------------------
# Errors
# -------------------------
class SaveFileError(ValueError):
    """Raised when a save file is malformed or truncated."""
    pass


def _require(condition: bool, msg: str) -> None:
    if not condition:
        _log.warning(f"SaveFileError: {msg}")
        raise SaveFileError(msg)


@dataclass
class SaveState:
    deck: List[Card]
    columns: List[List[Card]]
    pile: List[Card]
    reserves: List[Optional[Card]]

    def summary(self) -> str:
        sizes = ",".join(str(len(c)) for c in self.columns)
        held = sum(1 for r in self.reserves if r is not None)
        return f"deck={len(self.deck)} columns=[{sizes}] pile={len(self.pile)} reserves={held}"


# -------------------------
# Card: suit(4) rank(4) face_up(1) valid(1) = 10 bytes
# An empty reserve slot is written as an all-zero record with valid=0
# -------------------------
def _pack_card(card: Optional[Card]) -> bytes:
    if card is None:
        return struct.pack(CARD_FMT, 0, 0, 0, 0)
    return struct.pack(CARD_FMT, int(card.suit), int(card.rank), int(card.face_up), 1)


def _pack_cards(cards: List[Card]) -> bytes:
    return struct.pack(COUNT_FMT, len(cards)) + b"".join(_pack_card(c) for c in cards)


class _Reader:
    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    @property
    def remaining(self) -> int:
        return len(self.data) - self.pos

    def take(self, n: int, what: str) -> bytes:
        _require(self.remaining >= n, f"Truncated save while reading {what}: need {n}, have {self.remaining}")
        chunk = self.data[self.pos:self.pos + n]
        self.pos += n
        return chunk

    def count(self, what: str) -> int:
        (n,) = struct.unpack(COUNT_FMT, self.take(COUNT_LEN, f"{what} count"))
        _require(n >= 0, f"Negative {what} count: {n}")
        _require(n * CARD_LEN <= self.remaining, f"{what} count {n} exceeds file size")
        return n

    def card(self, what: str) -> Optional[Card]:
        suit, rank, face_up, valid = struct.unpack(CARD_FMT, self.take(CARD_LEN, what))
        if not valid:
            return None
        _require(Suit.HEARTS <= suit <= Suit.SPADES, f"Invalid suit {suit} in {what}")
        _require(Rank.ACE <= rank <= Rank.KING, f"Invalid rank {rank} in {what}")
        return Card(Suit(suit), Rank(rank), bool(face_up))

    def cards(self, what: str) -> List[Card]:
        out = []
        for i in range(self.count(what)):
            card = self.card(f"{what}[{i}]")
            _require(card is not None, f"Empty card record in {what}[{i}]")
            out.append(card)
        return out


# -------------------------
# Whole file: magic(9) deck columns*7 pile reserves*4
# -------------------------
def build_save(tableau: "Tableau") -> bytes:
    parts = [MAGIC, _pack_cards(tableau.get_deck().cards)]
    parts.extend(_pack_cards(column) for column in tableau.columns)
    parts.append(_pack_cards(tableau.pile))
    parts.extend(_pack_card(slot) for slot in tableau.reserves)
    return b"".join(parts)


def parse_save(data: bytes) -> SaveState:
    reader = _Reader(data)
    _require(reader.take(MAGIC_LEN, "magic") == MAGIC, "Bad magic header")

    deck = reader.cards("deck")
    columns = [reader.cards(f"column{i + 1}") for i in range(COLUMNS_SIZE)]
    pile = reader.cards("pile")

    reserves: List[Optional[Card]] = []
    for slot in range(RESERVE_SLOTS_SIZE):
        card = reader.card(f"reserve{slot + 1}")
        _require(card is None or card.suit == slot, f"Reserve {slot + 1} holds a foreign suit: {card}")
        reserves.append(card)

    if reader.remaining:
        _log.warning(f"Ignoring {reader.remaining} trailing bytes in save")

    return SaveState(deck=deck, columns=columns, pile=pile, reserves=reserves)


def apply_save(tableau: "Tableau", state: SaveState) -> None:
    tableau.get_deck().set_cards(state.deck)
    tableau.columns = [list(column) for column in state.columns]
    tableau.pile = list(state.pile)
    tableau.reserves = list(state.reserves)
    # not stored on disk; the last drawn card is the pile top
    tableau.current_card = tableau.pile[-1] if tableau.pile else None


# -------------------------
# Files
# -------------------------
def is_valid_save_name(name: str) -> bool:
    if not name or len(name) > MAX_NAME_LEN:
        return False
    if any(ch in ILLEGAL_NAME_CHARS or ord(ch) < 32 for ch in name):
        return False
    return any(ch not in " ." for ch in name)


def save_path(name: str, directory: Optional[str] = None) -> str:
    return os.path.join(directory or SAVE_DIR, name + SAVE_EXT)


def save_exists(name: str, directory: Optional[str] = None) -> bool:
    return os.path.isfile(save_path(name, directory))


def save_game(tableau: "Tableau", name: str, directory: Optional[str] = None) -> bool:
    path = save_path(name, directory)
    raw = build_save(tableau)
    with _io_lock:
        try:
            with open(path, "wb") as f:
                f.write(raw)
        except (OSError, ValueError) as e:
            _log.error(f"Cannot write save {path}: {e}")
            return False
    log_record(_log, "SAVE", name, raw, note=path)
    return True


def load_game(tableau: "Tableau", name: str, directory: Optional[str] = None) -> bool:
    """
    Parse the whole file before touching the tableau, so a truncated or
    corrupt save leaves the live game unchanged.
    """
    path = save_path(name, directory)
    with _io_lock:
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except (OSError, ValueError) as e:
            _log.warning(f"Cannot open save {path}: {e}")
            return False

    try:
        state = parse_save(raw)
    except SaveFileError as e:
        log_record(_log, "LOAD", name, raw, note=f"rejected: {e}", level=logging.WARNING)
        return False

    apply_save(tableau, state)
    log_record(_log, "LOAD", name, raw, parsed=state.summary(), level=logging.INFO)
    return True
