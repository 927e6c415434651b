# src/solitaire/console/commands.py

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from solitaire.common.constants import COLUMNS_SIZE, RESERVE_SLOTS_SIZE
from solitaire.common.logging_utils import get_logger
from solitaire.common.savefile import is_valid_save_name, save_game
from solitaire.common.tableau import Tableau

log = get_logger("console.commands")

INVALID_COLUMN = "Invalid column"
INVALID_RESERVE = "Invalid reserve slot"
MOVED_ONE = "Card moved"
MOVED_MANY = "Cards moved"
CANNOT_MOVE_ONE = "Cannot move card"
CANNOT_MOVE_MANY = "Cannot move cards"

HELP_TEXT = (
    "Available commands\n"
    "quit, exit, q - leave the game\n"
    "reset - deal a new game\n"
    "shuffle, s - turn the pile back into the deck once the deck is empty\n"
    "draw, d - draw a card\n"
    "move, m [from column] [to column] [count] - move cards between columns\n"
    "pile-column, pc [column] - move the drawn card to a column\n"
    "pile-reserve, pr [reserve] - move the drawn card to a reserve\n"
    "column-reserve, cr [column] [reserve] - move a column's top card to a reserve\n"
    "reserve-column, rc [reserve] [column] - move a reserve's card to a column\n"
    "menu - back to the main menu\n"
    "save [name] - save the game\n"
    "help, h - show this list"
)


@dataclass(frozen=True)
class CommandResult:
    message: str
    quit: bool = False
    menu: bool = False


class CommandInterpreter:
    """
    Turns one line of user text into one Tableau call.
    Column and reserve numbers are typed 1-based and range-checked here;
    the engine only ever sees valid 0-based indices.
    """

    def __init__(self, tableau: Tableau, save_dir: Optional[str] = None) -> None:
        self.tableau = tableau
        self.save_dir = save_dir
        self._handlers: Dict[str, Callable[[List[str]], CommandResult]] = {}
        for names, handler in (
            (("draw", "d"), self._draw),
            (("move", "m"), self._move),
            (("pile-column", "pc"), self._pile_to_column),
            (("pile-reserve", "pr"), self._pile_to_reserve),
            (("column-reserve", "cr"), self._column_to_reserve),
            (("reserve-column", "rc"), self._reserve_to_column),
            (("shuffle", "s"), self._shuffle),
            (("reset",), self._reset),
            (("quit", "exit", "q"), self._quit),
            (("menu",), self._menu),
            (("save",), self._save),
            (("help", "h"), self._help),
        ):
            for name in names:
                self._handlers[name] = handler

    def handle(self, line: str) -> CommandResult:
        parts = line.split()
        if not parts:
            return CommandResult("Unknown command")
        handler = self._handlers.get(parts[0].lower())
        if handler is None:
            log.debug(f"unknown command: {parts[0]!r}")
            return CommandResult("Unknown command")
        result = handler(parts[1:])
        log.info(f"{line.strip()!r} -> {result.message.splitlines()[0] if result.message else ''}")
        return result

    # ---------- argument helpers ----------
    @staticmethod
    def _ints(args: List[str], expected: int) -> Optional[List[int]]:
        if len(args) != expected:
            return None
        try:
            return [int(a) for a in args]
        except ValueError:
            return None

    @staticmethod
    def _column_ok(n: int) -> bool:
        return 1 <= n <= COLUMNS_SIZE

    @staticmethod
    def _reserve_ok(n: int) -> bool:
        return 1 <= n <= RESERVE_SLOTS_SIZE

    # ---------- commands ----------
    def _draw(self, args: List[str]) -> CommandResult:
        if self.tableau.draw_card():
            return CommandResult("Card drawn")
        return CommandResult('Deck is empty, use "shuffle" to turn the pile over')

    def _move(self, args: List[str]) -> CommandResult:
        nums = self._ints(args, 3)
        if nums is None:
            return CommandResult("Invalid arguments, expected move [from column] [to column] [count]")
        src, dst, count = nums
        if not (self._column_ok(src) and self._column_ok(dst)):
            return CommandResult(INVALID_COLUMN)
        ok = self.tableau.move_card(src - 1, dst - 1, count)
        if ok:
            return CommandResult(MOVED_ONE if count == 1 else MOVED_MANY)
        return CommandResult(CANNOT_MOVE_ONE if count == 1 else CANNOT_MOVE_MANY)

    def _pile_to_column(self, args: List[str]) -> CommandResult:
        nums = self._ints(args, 1)
        if nums is None:
            return CommandResult("Invalid arguments, expected pile-column [column]")
        (dst,) = nums
        if not self._column_ok(dst):
            return CommandResult(INVALID_COLUMN)
        ok = self.tableau.move_from_pile_to_column(dst - 1)
        return CommandResult(MOVED_ONE if ok else CANNOT_MOVE_ONE)

    def _pile_to_reserve(self, args: List[str]) -> CommandResult:
        nums = self._ints(args, 1)
        if nums is None:
            return CommandResult("Invalid arguments, expected pile-reserve [reserve]")
        (slot,) = nums
        if not self._reserve_ok(slot):
            return CommandResult(INVALID_RESERVE)
        ok = self.tableau.move_from_pile_to_reserve(slot - 1)
        return CommandResult(MOVED_ONE if ok else CANNOT_MOVE_ONE)

    def _column_to_reserve(self, args: List[str]) -> CommandResult:
        nums = self._ints(args, 2)
        if nums is None:
            return CommandResult("Invalid arguments, expected column-reserve [column] [reserve]")
        src, slot = nums
        if not self._column_ok(src):
            return CommandResult(INVALID_COLUMN)
        if not self._reserve_ok(slot):
            return CommandResult(INVALID_RESERVE)
        ok = self.tableau.move_from_column_to_reserve(src - 1, slot - 1)
        return CommandResult(MOVED_ONE if ok else CANNOT_MOVE_ONE)

    def _reserve_to_column(self, args: List[str]) -> CommandResult:
        nums = self._ints(args, 2)
        if nums is None:
            return CommandResult("Invalid arguments, expected reserve-column [reserve] [column]")
        slot, dst = nums
        if not self._reserve_ok(slot):
            return CommandResult(INVALID_RESERVE)
        if not self._column_ok(dst):
            return CommandResult(INVALID_COLUMN)
        ok = self.tableau.move_from_reserve_to_column(slot - 1, dst - 1)
        return CommandResult(MOVED_ONE if ok else CANNOT_MOVE_ONE)

    def _shuffle(self, args: List[str]) -> CommandResult:
        if self.tableau.reshuffle_deck_from_pile():
            return CommandResult("Pile shuffled back into the deck")
        return CommandResult('Cannot shuffle while the deck holds cards, use "draw"')

    def _reset(self, args: List[str]) -> CommandResult:
        self.tableau.reset()
        return CommandResult("New game dealt")

    def _quit(self, args: List[str]) -> CommandResult:
        return CommandResult("Exiting...", quit=True)

    def _menu(self, args: List[str]) -> CommandResult:
        return CommandResult("", menu=True)

    def _save(self, args: List[str]) -> CommandResult:
        if len(args) != 1:
            return CommandResult("Invalid arguments, expected save [name]")
        name = args[0]
        if not is_valid_save_name(name):
            return CommandResult("Save name contains characters that are not allowed")
        if save_game(self.tableau, name, self.save_dir):
            return CommandResult(f"Game saved as {name}")
        return CommandResult("Could not write the save file")

    def _help(self, args: List[str]) -> CommandResult:
        return CommandResult(HELP_TEXT)
