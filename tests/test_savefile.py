import struct

import pytest

from solitaire.common.cards import Rank, Suit
from solitaire.common.constants import CARD_LEN, MAGIC
from solitaire.common.savefile import (
    SaveFileError,
    build_save,
    is_valid_save_name,
    load_game,
    parse_save,
    save_exists,
    save_game,
    save_path,
)
from solitaire.common.tableau import Tableau

from helpers import c, empty_tableau


def _played_tableau(seed: int = 21) -> Tableau:
    t = Tableau(seed=seed)
    t.start()
    for _ in range(5):
        t.draw_card()
    t.reserves[0] = c("3H")
    t.reserves[3] = c("AS")
    return t


def _snapshot(t: Tableau):
    return (list(t.deck.cards), [list(col) for col in t.columns], list(t.pile), list(t.reserves))


def test_save_then_load_reproduces_the_table(tmp_path):
    src = _played_tableau()
    assert save_game(src, "slot1", str(tmp_path))
    assert (tmp_path / "slot1.sot").exists()

    dst = Tableau(seed=1)
    dst.start()
    assert load_game(dst, "slot1", str(tmp_path))
    assert _snapshot(dst) == _snapshot(src)
    assert dst.get_current_card() == src.pile[-1]


def test_tableau_save_and_load_methods(tmp_path):
    src = _played_tableau(seed=5)
    assert src.save("mine", str(tmp_path))
    dst = Tableau(seed=6)
    assert dst.load("mine", str(tmp_path))
    assert _snapshot(dst) == _snapshot(src)


def test_byte_layout():
    t = empty_tableau()
    t.deck.set_cards([c("KD", up=False)])
    t.columns[0] = [c("7S")]
    t.pile = [c("AH"), c("2C")]
    t.reserves[1] = c("AD")
    raw = build_save(t)

    assert raw[:9] == b"Solitaire"
    assert struct.unpack_from("<i", raw, 9) == (1,)
    assert struct.unpack_from("<iiBB", raw, 13) == (Suit.DIAMONDS, Rank.KING, 0, 1)
    assert struct.unpack_from("<i", raw, 23) == (1,)
    assert struct.unpack_from("<iiBB", raw, 27) == (Suit.SPADES, Rank.SEVEN, 1, 1)
    # six empty columns, then the pile
    pile_at = 37 + 6 * 4
    assert struct.unpack_from("<i", raw, pile_at) == (2,)
    reserves_at = pile_at + 4 + 2 * CARD_LEN
    assert struct.unpack_from("<iiBB", raw, reserves_at) == (0, 0, 0, 0)
    assert struct.unpack_from("<iiBB", raw, reserves_at + CARD_LEN) == (Suit.DIAMONDS, Rank.ACE, 1, 1)
    assert len(raw) == reserves_at + 4 * CARD_LEN


def test_parse_rejects_bad_magic():
    raw = build_save(_played_tableau())
    with pytest.raises(SaveFileError):
        parse_save(b"Solitairf" + raw[9:])


@pytest.mark.parametrize("cut", [0, 5, 9, 12, 40, -1])
def test_parse_rejects_truncated_data(cut):
    raw = build_save(_played_tableau())
    with pytest.raises(SaveFileError):
        parse_save(raw[:cut])


def test_parse_rejects_negative_count():
    raw = MAGIC + struct.pack("<i", -3)
    with pytest.raises(SaveFileError):
        parse_save(raw)


def test_parse_rejects_bad_rank_in_a_valid_card():
    raw = bytearray(build_save(_played_tableau()))
    struct.pack_into("<i", raw, 13 + 4, 14)
    with pytest.raises(SaveFileError):
        parse_save(bytes(raw))


def test_parse_rejects_foreign_suit_in_reserve():
    t = empty_tableau()
    t.reserves[0] = c("AS")
    with pytest.raises(SaveFileError):
        parse_save(build_save(t))


def test_parse_ignores_trailing_bytes():
    src = _played_tableau()
    state = parse_save(build_save(src) + b"\x00\x01")
    assert state.pile == src.pile


def test_truncated_file_leaves_the_live_game_untouched(tmp_path):
    raw = build_save(_played_tableau(seed=3))
    (tmp_path / "broken.sot").write_bytes(raw[: len(raw) // 2])

    live = _played_tableau(seed=4)
    before = _snapshot(live)
    assert not load_game(live, "broken", str(tmp_path))
    assert _snapshot(live) == before


def test_load_missing_file_returns_false(tmp_path):
    t = Tableau(seed=1)
    assert not load_game(t, "nothing", str(tmp_path))
    assert not save_exists("nothing", str(tmp_path))


def test_save_into_missing_directory_returns_false(tmp_path):
    t = _played_tableau()
    assert not save_game(t, "x", str(tmp_path / "no" / "such" / "dir"))


def test_save_path_uses_the_sot_extension(tmp_path):
    assert save_path("game", str(tmp_path)).endswith("game.sot")


@pytest.mark.parametrize(
    "name, ok",
    [
        ("latest", True),
        ("my game 2", True),
        ("", False),
        ("...", False),
        ("   ", False),
        ("a/b", False),
        ("what?", False),
        ("x" * 256, False),
        ("a\x00b", False),
        ("tab\there", False),
    ],
)
def test_save_name_validation(name, ok):
    assert is_valid_save_name(name) is ok


def test_nul_in_name_fails_cleanly(tmp_path):
    t = _played_tableau()
    assert not save_game(t, "a\x00b", str(tmp_path))

    live = _played_tableau(seed=4)
    before = _snapshot(live)
    assert not load_game(live, "a\x00b", str(tmp_path))
    assert _snapshot(live) == before
