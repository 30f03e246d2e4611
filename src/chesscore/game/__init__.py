"""Game layer: move history, repetition and terminal-state tracking.

Quick start::

    from chesscore.game import Game

    game = Game.new()
    game.move_to("e4")
    game.move_to("e5")
    print(game.fen())
"""

from chesscore.game.state import Game, MoveRecord

__all__ = [
    "Game",
    "MoveRecord",
]
