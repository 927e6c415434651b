# common/__init__.py

from .cards import Card, Deck, Rank, Suit
from .errors import ContractError
from .savefile import SaveFileError, load_game, save_game
from .tableau import Tableau

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "ContractError",
    "SaveFileError",
    "load_game",
    "save_game",
    "Tableau",
]
