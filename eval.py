#!/usr/bin/env python3
"""
Check and measure the alpha-beta TicTacToe engine.

Usage:
    python eval.py                       # 3x3, all checks
    python eval.py --games 500 --seed 1
    python eval.py --skip-agreement --log-level DEBUG
"""

import sys
import time
import argparse
import logging
from pathlib import Path

from tqdm.auto import tqdm

# Add src to path
sys.path = [str(Path(__file__).parent / "src")] + sys.path

from ttt_search import (
    AlphaBetaModel,
    EvalConfig,
    Player,
    Win,
    count_canonical_positions,
    eval_pruning_agreement,
    eval_vs_random,
    play_game,
    search,
)


def main():
    parser = argparse.ArgumentParser(description="Evaluate the alpha-beta TicTacToe engine")
    parser.add_argument("--size", type=int, default=3, help="Board size N")
    parser.add_argument("--first", choices=["X", "O"], default="X", help="Player who opens")
    parser.add_argument("--games", type=int, default=100, help="Games vs random opponent")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--no-progress", action="store_true", help="Hide progress bars")
    parser.add_argument("--skip-agreement", action="store_true",
                        help="Skip the exhaustive alpha-beta vs minimax check")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level")

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    config = EvalConfig(
        size=args.size,
        first=Player.CROSS if args.first == "X" else Player.NOUGHT,
        games=args.games,
        seed=args.seed,
        progress=not args.no_progress,
    )

    model = AlphaBetaModel()
    print(f"Model: {model}")
    print(f"Board: {config.size}x{config.size}, {config.first.mark} opens")

    # Opening search
    print("\n=== Opening Search ===")
    board = model.game_start(config.first, config.size)
    t0 = time.perf_counter()
    result = search(board)
    print(f"  Best move: {result.move.cell}")
    print(f"  Score:     {result.score:+d}")
    print(f"  Nodes:     {result.nodes:,}")
    print(f"  Time:      {time.perf_counter() - t0:.2f}s")

    # Self-play
    print("\n=== Self-Play ===")
    outcome, moves = play_game(model, config.size, config.first)
    result_str = f"{outcome.player.mark} wins" if isinstance(outcome, Win) else "Draw"
    print(f"  Result: {result_str} after {len(moves)} moves")

    # Pruning agreement
    if not args.skip_agreement:
        print("\n=== Alpha-Beta vs Minimax (all states) ===")
        ag = eval_pruning_agreement(config.size, config.first, progress=config.progress)
        tqdm.write(f"  States:     {ag['n_states']:,}")
        tqdm.write(f"  Canonical:  {count_canonical_positions(config.size, config.first):,}")
        tqdm.write(f"  Mismatches: {ag['n_mismatches']}")
        tqdm.write(f"  Agreement:  {ag['agreement']:.2%}")
        tqdm.write(f"  AB nodes:   {ag['ab_nodes_total']:,}")

    # vs Random
    print(f"\n=== vs Random ({config.games} games) ===")
    r = eval_vs_random(config.games, config.size, config.first, config.seed, progress=config.progress)
    print(f"  Wins:   {r['engine_w']:.2%}")
    print(f"  Draws:  {r['engine_d']:.2%}")
    print(f"  Losses: {r['engine_l']:.2%}")


if __name__ == "__main__":
    main()
