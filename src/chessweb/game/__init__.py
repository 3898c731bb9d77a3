"""Game management layer: session state and turn controller.

Quick start::

    from chessweb.game import GameController

    ctrl = GameController()
    ctrl.new_game(engine_color=Color.BLACK, difficulty="easy")
    ctrl.submit_move(E2, E4)  # engine answers immediately
"""

from chessweb.game.controller import GameController, GameEvents
from chessweb.game.state import GameState, IllegalMoveError

__all__ = [
    "GameController",
    "GameEvents",
    "GameState",
    "IllegalMoveError",
]
