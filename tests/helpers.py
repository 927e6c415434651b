from solitaire.common.cards import Card, Rank, Suit
from solitaire.common.tableau import Tableau

SUIT_CODES = {"H": Suit.HEARTS, "D": Suit.DIAMONDS, "C": Suit.CLUBS, "S": Suit.SPADES}
RANK_CODES = {"A": 1, "J": 11, "Q": 12, "K": 13}


def c(code: str, up: bool = True) -> Card:
    """c("7S") -> seven of spades face up; c("10H", up=False) -> face down."""
    rank_text, suit_text = code[:-1], code[-1]
    rank = RANK_CODES.get(rank_text) or int(rank_text)
    return Card(SUIT_CODES[suit_text], Rank(rank), up)


def empty_tableau(seed: int = 7) -> Tableau:
    t = Tableau(seed=seed)
    t.deck.set_cards([])
    return t
