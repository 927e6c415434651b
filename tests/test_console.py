import itertools
import threading

from solitaire.common.savefile import save_exists, save_game
from solitaire.common.tableau import Tableau
from solitaire.console.app import ConsoleApp
from solitaire.console.cardfx.board import draw_board
from solitaire.console.cardfx.celebrate import compose_big_word
from solitaire.console.cardfx.terminal import Canvas, Style, rainbow
from solitaire.console.menu import MainMenu, SaturationPulse, render_menu
from solitaire.console.watcher import watch_resize

from helpers import c, empty_tableau


def scripted(*lines):
    it = iter(lines)

    def _input(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return _input


# ---------- canvas ----------
def test_canvas_grows_and_overwrites():
    canvas = Canvas()
    canvas.put(2, 1, "abc")
    canvas.put(3, 1, "X")
    assert canvas.plain_lines() == ["", "  aXc"]
    assert canvas.width == 5 and canvas.height == 2
    assert canvas.char_at(3, 1) == "X"
    assert canvas.char_at(30, 30) == " "


def test_canvas_render_emits_style_changes_once():
    red = Style(prefix="<r>")
    canvas = Canvas(background=Style(prefix="<bg>"))
    canvas.put(0, 0, "ab", red)
    canvas.put(2, 0, "c")
    out = canvas.render()
    assert out.count("<r>") == 1
    assert out.startswith("<r>ab<bg>c")


def test_rainbow_gives_rgb_triplets():
    for tick in range(0, 100, 7):
        r, g, b = rainbow(tick, 50, 0.7)
        assert all(0 <= v <= 255 for v in (r, g, b))


# ---------- board ----------
def test_board_shows_columns_slots_and_cards():
    t = empty_tableau()
    t.columns[0] = [c("9S", up=False), c("KH")]
    t.pile = [c("QC")]
    t.reserves[2] = c("AC")
    text = "\n".join(draw_board(t).plain_lines())

    for n in "1234567":
        assert n in text
    assert "K" in text and "♥" in text
    assert "Q" in text and "♣" in text
    assert "░" in text
    # empty hearts slot shows its suit
    assert text.count("♥") >= 2


def test_board_hides_deck_when_empty():
    t = empty_tableau()
    assert "╔" not in "\n".join(draw_board(t).plain_lines())
    t.deck.set_cards([c("2D", up=False)])
    assert "╔" in "\n".join(draw_board(t).plain_lines())


def test_big_word_is_centred():
    lines, x, y = compose_big_word(120, 40, "WIN")
    assert lines and all("█" in line for line in lines[:1])
    assert 0 < x < 120 and 0 <= y < 40


# ---------- menu ----------
def test_saturation_pulse_stays_in_range():
    pulse = SaturationPulse()
    values = [pulse.step() for _ in range(300)]
    assert min(values) >= 0.48 and max(values) <= 0.92


def test_menu_frame_colours_every_character():
    canvas = render_menu(["ab"], 0, 0.9)
    assert canvas.plain_lines() == ["ab"]
    assert "38;2;" in canvas.render()


def test_menu_new_game(tmp_path, capsys):
    t = Tableau(seed=1)
    menu = MainMenu(t, _renderer(), save_dir=str(tmp_path),
                    input_fn=scripted("x", "9", "1"), intro_frames=0)
    assert menu.run()
    assert [len(col) for col in t.columns] == [1, 2, 3, 4, 5, 6, 7]


def test_menu_loads_named_and_latest(tmp_path, capsys):
    src = Tableau(seed=2)
    src.start()
    src.draw_card()
    save_game(src, "mine", str(tmp_path))
    save_game(src, "latest", str(tmp_path))

    dst = Tableau(seed=3)
    menu = MainMenu(dst, _renderer(), save_dir=str(tmp_path),
                    input_fn=scripted("2", "bad/name", "2", "nosuch", "2", "mine"), intro_frames=0)
    assert menu.run()
    assert dst.pile == src.pile

    dst = Tableau(seed=4)
    menu = MainMenu(dst, _renderer(), save_dir=str(tmp_path),
                    input_fn=scripted("3"), intro_frames=0)
    assert menu.run()
    assert dst.columns == src.columns


def test_menu_option_three_needs_latest(tmp_path, capsys):
    menu = MainMenu(Tableau(seed=1), _renderer(), save_dir=str(tmp_path),
                    input_fn=scripted("3", "quit"), intro_frames=0)
    assert not menu.run()
    assert "No such option" in capsys.readouterr().out


# ---------- resize watcher ----------
def test_watcher_redraws_on_size_change():
    sizes = iter([(80, 24), (80, 24), (100, 30)] + [(100, 30)] * 50)
    stop = threading.Event()
    lock = threading.Lock()
    calls = []

    def redraw():
        calls.append(lock.locked())
        stop.set()

    watch_resize(lambda: next(sizes), redraw, lock, stop, threading.Event(), poll_sec=0)
    assert calls == [True]


def test_watcher_stays_quiet_while_paused():
    stop = threading.Event()
    paused = threading.Event()
    paused.set()
    counter = itertools.count()
    calls = []

    def get_size():
        n = next(counter)
        if n > 20:
            stop.set()
        return (80 + n, 24)

    watch_resize(get_size, lambda: calls.append(1), threading.Lock(), stop, paused, poll_sec=0)
    assert calls == []


# ---------- app loop ----------
def _renderer():
    from solitaire.console.cardfx.terminal import TerminalRenderer
    return TerminalRenderer(clear_each_frame=True)


def test_app_plays_commands_and_autosaves(tmp_path, capsys):
    t = Tableau(seed=8)
    app = ConsoleApp(t, _renderer(), save_dir=str(tmp_path),
                     input_fn=scripted("1", "draw", "help", "quit"),
                     intro_frames=0, celebrate_fn=lambda r: None)
    app.run()
    assert len(t.pile) == 1
    assert save_exists("latest", str(tmp_path))
    assert app.stop_event.is_set()
    assert app._watcher is not None and not app._watcher.is_alive()

    loaded = Tableau(seed=9)
    assert loaded.load("latest", str(tmp_path))
    assert loaded.pile == t.pile


def test_app_quits_from_menu(tmp_path, capsys):
    app = ConsoleApp(Tableau(seed=1), _renderer(), save_dir=str(tmp_path),
                     input_fn=scripted("quit"), intro_frames=0)
    app.run()
    assert not save_exists("latest", str(tmp_path))


def test_app_celebrates_and_deals_again(tmp_path, capsys):
    t = Tableau(seed=10)
    celebrated = []
    # aces come off the deck in shuffled order, so offer each one to every 2
    moves = iter(["1"] + ["d", "pc 2", "pc 3", "pc 4", "pc 5"] * 4)

    def answer(prompt=""):
        if prompt.startswith("Game won"):
            return "yes"
        try:
            return next(moves)
        except StopIteration:
            raise EOFError

    app = ConsoleApp(t, _renderer(), save_dir=str(tmp_path), input_fn=answer,
                     intro_frames=0, celebrate_fn=celebrated.append, debug_endgame=True)
    app.run()
    assert len(celebrated) == 1
    assert [len(col) for col in t.columns] == [1, 2, 3, 4, 5, 6, 7]
    assert not t.is_game_won()


def test_renderer_hides_cursor_until_end(capsys):
    r = _renderer()
    r.begin()
    assert "\033[?25l" in capsys.readouterr().out
    r.end()
    assert "\033[?25h" in capsys.readouterr().out


def test_commands_run_under_the_draw_lock(tmp_path, capsys):
    app = ConsoleApp(Tableau(seed=5), _renderer(), save_dir=str(tmp_path),
                     input_fn=scripted("1", "reset", "draw", "quit"), intro_frames=0)
    handle = app.interpreter.handle
    held = []

    def locked_handle(line):
        held.append(app.draw_lock.locked())
        return handle(line)

    app.interpreter.handle = locked_handle
    app.run()
    assert held == [True, True, True]
