"""
Decision making for autonomous seats.

RANDOM reproduces the hub's opponents: discard a uniformly random tile,
never claim a triplet. SHANTEN discards the tile that leaves the hand
closest to ready and claims a triplet only when that gets it closer. Both
strategies always declare an available win and always take a quad.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tilegame.logic.enums import AIPlayerStrategy, ClaimAction, ClaimWindowKind
from tilegame.logic.shanten import calculate_shanten
from tilegame.logic.tiles import hand_to_34_array, tile_to_34

if TYPE_CHECKING:
    from tilegame.logic.rng import DecisionRng
    from tilegame.logic.settings import TableSettings
    from tilegame.logic.state import ClaimOptions, SeatState, TableState


def _best_discard_shanten(tiles_34: list[int]) -> int:
    """Lowest shanten reachable by discarding one tile from tiles_34."""
    best = None
    for tile_34, count in enumerate(tiles_34):
        if not count:
            continue
        tiles_34[tile_34] -= 1
        shanten = calculate_shanten(tiles_34)
        tiles_34[tile_34] += 1
        if best is None or shanten < best:
            best = shanten
    return best if best is not None else calculate_shanten(tiles_34)


class AIPlayer:
    def __init__(self, rng: DecisionRng, strategy: AIPlayerStrategy = AIPlayerStrategy.RANDOM) -> None:
        self.strategy = strategy
        self._rng = rng

    def select_discard(self, seat_state: SeatState) -> int:
        if not seat_state.tiles:
            raise ValueError("cannot select discard from empty hand")
        if self.strategy == AIPlayerStrategy.RANDOM:
            return self._rng.choice(seat_state.tiles)
        return self._select_shanten_discard(seat_state)

    def _select_shanten_discard(self, seat_state: SeatState) -> int:
        """Discard the tile leaving the lowest shanten; ties go to the most recently drawn tile."""
        tiles_34 = hand_to_34_array(seat_state.tiles)
        scored: dict[int, int] = {}
        for tile_34 in {tile_to_34(t) for t in seat_state.tiles}:
            tiles_34[tile_34] -= 1
            scored[tile_34] = calculate_shanten(tiles_34)
            tiles_34[tile_34] += 1
        best = min(scored.values())
        return next(t for t in reversed(seat_state.tiles) if scored[tile_to_34(t)] == best)

    def should_claim_triplet(self, seat_state: SeatState, tile_id: int) -> bool:
        if self.strategy == AIPlayerStrategy.RANDOM:
            return False
        tiles_34 = hand_to_34_array(seat_state.tiles)
        current = calculate_shanten(tiles_34)
        tiles_34[tile_to_34(tile_id)] -= 2
        return _best_discard_shanten(tiles_34) < current

    def choose_claim(self, seat_state: SeatState, options: ClaimOptions, tile_id: int) -> ClaimAction:
        """Answer a claim window: win, then quad, then (strategy permitting) triplet."""
        if options.can_win:
            return ClaimAction.WIN
        if options.can_quad:
            return ClaimAction.QUAD
        if options.can_triplet and self.should_claim_triplet(seat_state, tile_id):
            return ClaimAction.TRIPLET
        return ClaimAction.PASS

    def think_delay(self, settings: TableSettings) -> float:
        """Seconds to wait before acting, base delay plus random jitter."""
        return settings.think_delay_seconds + self._rng.uniform(0.0, settings.think_jitter_seconds)


class AIPlayerController:
    """
    Decision-maker for autonomous seats.

    Maps seats to AIPlayers and answers questions about the current table;
    it never applies anything. Orchestration is TableService's job.
    """

    def __init__(self, ai_players: dict[int, AIPlayer]) -> None:
        self._ai_players = ai_players

    @classmethod
    def for_settings(cls, settings: TableSettings, rng: DecisionRng) -> AIPlayerController:
        players = {
            seat: AIPlayer(rng, settings.autonomous_strategy)
            for seat in range(settings.num_seats)
            if seat != settings.human_seat
        }
        return cls(players)

    def get_player(self, seat: int) -> AIPlayer | None:
        return self._ai_players.get(seat)

    def get_discard(self, seat: int, state: TableState) -> int | None:
        """Tile the autonomous seat discards now, or None if seat is not autonomous."""
        player = self._ai_players.get(seat)
        if player is None:
            return None
        return player.select_discard(state.seats[seat])

    def get_claim_response(self, seat: int, state: TableState) -> ClaimAction | None:
        """Autonomous answer to the open claim window, or None if seat has nothing to answer."""
        player = self._ai_players.get(seat)
        window = state.claim_window
        if player is None or window is None or seat not in window.pending_seats:
            return None
        options = window.eligible[seat]
        if window.kind == ClaimWindowKind.SELF_DRAW:
            if options.can_win:
                return ClaimAction.WIN
            return ClaimAction.QUAD if options.can_quad else ClaimAction.PASS
        return player.choose_claim(state.seats[seat], options, window.tile_id)
