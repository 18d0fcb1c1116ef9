"""Typed domain exceptions for connection-game rule violations.

Engine functions raise these and never partially apply a move. The session
layer is the boundary that catches GameRuleError and turns it into a logged
no-op.
"""


class GameRuleError(Exception):
    """Base exception for connection-game rule violations."""


class InvalidMoveError(GameRuleError):
    """Target cell is out of range or already occupied."""


class GameFinishedError(GameRuleError):
    """A move was attempted after the game reached a terminal outcome."""


class UnsupportedSettingsError(GameRuleError):
    """Settings contain values the engine cannot honor."""
