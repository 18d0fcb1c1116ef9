"""Play seeded automated games and print their outcomes.

Both sides of the connection game are driven by the heuristic move selector
(plus the advisory collaborator when ADVISORY_BASE_URL is set); all four
tile-game seats are autonomous.

Usage:
    python bin/simulate.py gomoku --board-size 15
    python bin/simulate.py tilegame --games 5 --seed <192 hex chars>
    python bin/simulate.py tilegame --strategy shanten --contested
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from gomoku.logic.advisory import HttpMoveAdvisor, MoveAdviceRequest
from gomoku.logic.board import serialize_board
from gomoku.logic.game import apply_move, new_game
from gomoku.logic.move_selector import choose_move
from gomoku.logic.settings import DEFAULT_BOARD_SIZE, GomokuSettings, validate_settings
from shared.advisory.client import AdvisoryClient
from shared.advisory.settings import AdvisorySettings
from shared.logging import setup_logging
from tilegame.logic.enums import AIPlayerStrategy
from tilegame.logic.rng import generate_seed, validate_seed_hex
from tilegame.logic.settings import TableSettings
from tilegame.session.service import TableService

GAME_TIMEOUT_SECONDS = 60.0


async def simulate_gomoku(board_size: int) -> None:
    validate_settings(GomokuSettings(board_size=board_size))
    advisory_settings = AdvisorySettings()
    advisor = HttpMoveAdvisor(AdvisoryClient(advisory_settings)) if advisory_settings.enabled else None

    state = new_game(board_size)
    while not state.is_finished:
        advice = None
        if advisor is not None:
            advice = await advisor.advise(MoveAdviceRequest(serialized_board=serialize_board(state.board)))
        decision = choose_move(state.board, state.turn, advice)
        state, _ = apply_move(state, decision.row, decision.col)

    print(serialize_board(state.board))
    winner = state.winner.value if state.winner is not None else "draw"
    print(f"Result: {winner} after {state.move_count} moves")
    if state.win_line:
        print(f"  Line: {', '.join(f'({r},{c})' for r, c in state.win_line)}")


async def simulate_tilegame(seed: str, games: int, strategy: AIPlayerStrategy, *, contested: bool) -> None:
    settings = TableSettings(
        human_seat=None,
        contested_discard_claims=contested,
        autonomous_strategy=strategy,
        think_delay_seconds=0,
        think_jitter_seconds=0,
    )
    service = TableService(settings, seed=seed)
    print(f"Seed: {seed[:16]}...")
    await service.start()
    try:
        for game in range(games):
            if game:
                service.reset()
                await service.drain()
            state = await asyncio.wait_for(service.wait_until_finished(), timeout=GAME_TIMEOUT_SECONDS)
            outcome = state.outcome
            if outcome is None:
                continue
            winner = "-" if outcome.winner_seat is None else settings.seat_names[outcome.winner_seat]
            print(
                f"Game {state.game_number}: {outcome.kind.value:<15} winner={winner:<10} "
                f"turns={state.turn_count} pile_left={len(state.wall.tiles)}",
            )
    finally:
        await service.stop()


def main() -> None:
    parser = argparse.ArgumentParser(description="Run automated games")
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")
    subparsers = parser.add_subparsers(dest="game", required=True)

    gomoku_parser = subparsers.add_parser("gomoku", help="Heuristic self-play on one board")
    gomoku_parser.add_argument("--board-size", type=int, default=DEFAULT_BOARD_SIZE)

    tile_parser = subparsers.add_parser("tilegame", help="Four autonomous seats")
    tile_parser.add_argument("--seed", default=None, help="Hex seed (default: random)")
    tile_parser.add_argument("--games", type=int, default=1)
    tile_parser.add_argument(
        "--strategy",
        choices=[s.value for s in AIPlayerStrategy],
        default=AIPlayerStrategy.RANDOM.value,
    )
    tile_parser.add_argument("--contested", action="store_true", help="Let every seat claim discards")

    args = parser.parse_args()
    setup_logging(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    if args.game == "gomoku":
        asyncio.run(simulate_gomoku(args.board_size))
        return

    seed = args.seed or generate_seed()
    try:
        validate_seed_hex(seed)
    except (TypeError, ValueError) as e:
        print(f"Invalid seed: {e}", file=sys.stderr)
        sys.exit(1)
    asyncio.run(
        simulate_tilegame(seed, args.games, AIPlayerStrategy(args.strategy), contested=args.contested),
    )


if __name__ == "__main__":
    main()
