# src/solitaire/common/logging_utils.py

import logging
import os
from typing import Any, Optional

# Environment switches:
#   LOG_LEVEL=DEBUG / INFO / WARNING / ERROR
#   LOG_HEX=1 to include hexdumps of save files in logs
#   LOG_FILE=<path> to log into a file instead of stderr
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_HEX = os.getenv("LOG_HEX", "0") == "1"
LOG_FILE = os.getenv("LOG_FILE", "")


def setup_logging(level: str = LOG_LEVEL, filename: Optional[str] = LOG_FILE or None) -> None:
    """Call once at program start (console/app.py)."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        filename=filename,
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"solitaire.{name}")


def hexdump(data: bytes, max_len: int = 64) -> str:
    """Short hex dump: 'ab cd ef ...' limited to max_len bytes."""
    shown = data[:max_len]
    hex_part = " ".join(f"{b:02x}" for b in shown)
    if len(data) > max_len:
        hex_part += f" ... (+{len(data) - max_len} bytes)"
    return hex_part


def log_record(
    logger: logging.Logger,
    direction: str,               # "SAVE" / "LOAD"
    name: str,
    raw: bytes,
    parsed: Optional[Any] = None,
    note: str = "",
    level: int = logging.DEBUG,
) -> None:
    """
    Unified save-file log.
    name: save slot name (without extension).
    parsed: any parsed object (dataclass or dict) to print summary.
    """
    base = f"[{direction}] {name} len={len(raw)}"
    if note:
        base += f" | {note}"

    if parsed is not None:
        base += f" | parsed={parsed}"

    if LOG_HEX:
        base += f" | hex={hexdump(raw)}"

    logger.log(level, base)
