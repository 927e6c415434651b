# src/solitaire/common/errors.py

from .logging_utils import get_logger

_log = get_logger("errors")


class ContractError(RuntimeError):
    """Raised when a caller breaks an engine precondition (bad index, empty deck)."""
    pass


def require(condition: bool, msg: str) -> None:
    if not condition:
        _log.warning(f"ContractError: {msg}")
        raise ContractError(msg)
