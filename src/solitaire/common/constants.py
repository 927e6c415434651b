# src/solitaire/common/constants.py

import os
from typing import Optional

# Table layout
COLUMNS_SIZE = 7
RESERVE_SLOTS_SIZE = 4
DECK_SIZE = 52
DEALT_CARDS = COLUMNS_SIZE * (COLUMNS_SIZE + 1) // 2   # 28
COMPLETED_COLUMN_LEN = 13
COMPLETED_COLUMNS_TO_WIN = 4

# Save file
MAGIC = b"Solitaire"           # 9 bytes, no terminator
MAGIC_LEN = len(MAGIC)
SAVE_EXT = ".sot"
LATEST_SAVE = "latest"

# Wire formats (little-endian, packed)
COUNT_FMT = "<i"
CARD_FMT = "<i i B B"         # suit, rank, face_up, valid
COUNT_LEN = 4
CARD_LEN = 4 + 4 + 1 + 1       # 10

# Filename rules
ILLEGAL_NAME_CHARS = '\\/:*?"<>|'
MAX_NAME_LEN = 255

# Environment switches:
#   SOLITAIRE_SAVE_DIR=<dir> where .sot files live
#   SOLITAIRE_SEED=<int> deterministic shuffles
#   SOLITAIRE_DEBUG_ENDGAME=1 deal the near-won developer layout
SAVE_DIR = os.getenv("SOLITAIRE_SAVE_DIR", ".")


def parse_seed(raw: Optional[str]) -> Optional[int]:
    """Integer seed from the environment; anything unparsable means a random game."""
    try:
        return int(raw.strip()) if raw else None
    except ValueError:
        return None


SEED = parse_seed(os.getenv("SOLITAIRE_SEED"))
DEBUG_ENDGAME = os.getenv("SOLITAIRE_DEBUG_ENDGAME", "0") == "1"

# Console
RESIZE_POLL_SEC = 0.1
MENU_FRAME_SEC = 0.05
