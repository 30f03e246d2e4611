"""Rule thresholds used by draw detection."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Draw-rule thresholds for a game.

    The defaults are the FIDE numbers. ``automatic_draws_only`` switches
    :meth:`Game.is_draw` to the arbiter-free policy: fifty moves and
    threefold repetition are then claimable only, and the game ends on
    insufficient material, the seventy-five-move rule or fivefold
    repetition.
    """

    fifty_move_plies: int = 100
    repetition_limit: int = 3
    seventy_five_move_plies: int = 150
    fivefold_limit: int = 5
    insufficient_material_is_draw: bool = True
    automatic_draws_only: bool = False

    def __post_init__(self) -> None:
        for name in (
            "fifty_move_plies",
            "repetition_limit",
            "seventy_five_move_plies",
            "fivefold_limit",
        ):
            value = getattr(self, name)
            if value < 1:
                raise ValueError(f"{name} must be positive, got {value!r}")

    @classmethod
    def standard(cls) -> RulesConfig:
        return cls()


STANDARD_RULES = RulesConfig.standard()
