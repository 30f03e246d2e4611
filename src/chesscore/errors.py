"""Exceptions raised by the rules engine.

Every error is recoverable and leaves the game untouched. They subclass
:class:`ValueError` so callers that only care about "bad input" can catch
that.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chesscore.core.move import Move


class ChessError(Exception):
    """Base class for rules-engine errors."""


class MalformedFen(ChessError, ValueError):
    """FEN text that violates the FEN grammar or describes no playable board."""

    def __init__(self, fen: str, reason: str) -> None:
        super().__init__(f"{reason}: {fen!r}")
        self.fen = fen
        self.reason = reason


class IllegalMove(ChessError, ValueError):
    """A move that is not in the current legal move set."""

    def __init__(self, move: Move | str, fen: str, reason: str = "Illegal move") -> None:
        super().__init__(f"{reason}: {move} in {fen!r}")
        self.move = move
        self.fen = fen


class UnparsableNotation(IllegalMove):
    """Notation that is malformed or does not name exactly one legal move."""

    def __init__(
        self,
        notation: str,
        fen: str,
        candidates: int = 0,
        reason: str | None = None,
    ) -> None:
        if reason is None:
            reason = (
                f"Ambiguous notation ({candidates} legal moves match)"
                if candidates > 1
                else "Notation matches no legal move"
            )
        super().__init__(notation, fen, reason)
        self.notation = notation
        self.candidates = candidates
