"""Tile-game table settings."""

from pydantic import BaseModel, ConfigDict, Field

from tilegame.logic.enums import AIPlayerStrategy
from tilegame.logic.exceptions import UnsupportedSettingsError

DEFAULT_SEAT_NAMES = ("Player", "Old Wang", "Old Zhang", "Old Li")


class TableSettings(BaseModel):
    """
    Configuration for one tile-game table.

    Defaults reproduce the hub's table: one human at seat 0, three
    autonomous seats that discard at random after a 1.5-2.0s think delay,
    and claim windows offered to the human seat only.
    """

    model_config = ConfigDict(frozen=True)

    num_seats: int = 4
    seat_names: tuple[str, ...] = DEFAULT_SEAT_NAMES
    # None seats four autonomous players (simulations, tests)
    human_seat: int | None = 0

    # let autonomous seats contest discards too; off keeps the single-claimant table
    contested_discard_claims: bool = False

    autonomous_strategy: AIPlayerStrategy = AIPlayerStrategy.RANDOM
    think_delay_seconds: float = Field(default=1.5, ge=0)
    think_jitter_seconds: float = Field(default=0.5, ge=0)

    # None waits for the human indefinitely
    claim_window_seconds: float | None = Field(default=None, gt=0)


def validate_settings(settings: TableSettings) -> None:
    """Raise UnsupportedSettingsError for settings the engine cannot honor."""
    errors: list[str] = []

    if settings.num_seats != 4:  # noqa: PLR2004
        errors.append(f"num_seats={settings.num_seats} is not supported (only 4 seats)")

    if len(settings.seat_names) != settings.num_seats:
        errors.append(f"seat_names has {len(settings.seat_names)} entries for {settings.num_seats} seats")

    if settings.human_seat is not None and not 0 <= settings.human_seat < settings.num_seats:
        errors.append(f"human_seat={settings.human_seat} is not a seat")

    if errors:
        raise UnsupportedSettingsError("; ".join(errors))
