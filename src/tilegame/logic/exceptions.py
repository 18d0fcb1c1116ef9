"""Typed domain exceptions for tile-game rule violations.

Pure transitions in turn.py raise these without touching the input state.
TableService is the boundary that catches GameRuleError, logs it and keeps
the table unchanged.
"""


class GameRuleError(Exception):
    """Base exception for tile-game rule violations."""


class InvalidDiscardError(GameRuleError):
    """Tile cannot be discarded (wrong seat, not in hand, wrong phase)."""


class InvalidClaimError(GameRuleError):
    """Claim is not available to this seat on the current tile."""


class InvalidActionError(GameRuleError):
    """Action is not valid in the current table phase."""


class GameFinishedError(GameRuleError):
    """A transition was attempted after the game reached a terminal outcome."""


class UnsupportedSettingsError(GameRuleError):
    """Table settings contain values the engine cannot honor."""
