# ===================== replay_driver.py =====================
"""Replay a reward table through an ε-greedy bandit.

Run examples:
  # Sample-mean updates, 10% exploration, keep the Q trajectory for plotting
  python replay_driver.py --data data/simdata.csv --group Arm --response Y \
      --steps 999 --epsilon 0.1 --seed 1001 --track-history

  # Optimistic start with a fixed learning rate
  python replay_driver.py --data data/simdata.csv --group Arm --response Y \
      --steps 2999 --q0 5 --learning-rate 0.01 --seed 555 --track-history

Outputs land in results/<name>/ (summary.txt, summary.csv, history.csv)
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

from bandit import create_bandit
from errors import BanditError
from policy import DEFAULT_EPSILON

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def default_name(args: argparse.Namespace) -> str:
    lr = "mean" if args.learning_rate is None else f"lr{args.learning_rate:g}"
    return f"eps{args.epsilon:g}_q{args.q0:g}_{lr}_s{args.steps}"


def run(args: argparse.Namespace) -> Path:
    name = args.name or default_name(args)
    out_dir = Path(args.outdir) / name

    data = pd.read_csv(args.data)
    bandit = create_bandit(
        data, args.group, args.response,
        q0=args.q0, track_history=args.track_history, rng=args.seed,
    )
    bandit.train(args.steps, epsilon=args.epsilon, learning_rate=args.learning_rate)

    out_dir.mkdir(parents=True, exist_ok=True)
    summ = bandit.summary()
    summ.to_csv(out_dir / "summary.csv", index=False)
    if bandit.is_tracking:
        bandit.history_frame().to_csv(out_dir / "history.csv", index=False)

    best = bandit.best_arm()
    best_state = bandit[best]
    share = best_state.N / args.steps if args.steps else 0.0
    lr = "none" if args.learning_rate is None else f"{args.learning_rate:g}"
    summary = (
        f"Run: {name}\n"
        f"Data: {args.data}\n"
        f"Arms: {len(bandit)}\n"
        f"Steps: {args.steps}\n"
        f"Epsilon: {args.epsilon:g} | Learning Rate: {lr} | Q0: {args.q0:g}\n"
        f"Best Arm: {best}\n"
        f"Best Q: {best_state.Q:.4f} | Share: {share:.2%}\n"
        "\n"
        f"{summ.to_string(index=False)}\n"
    )
    with open(out_dir / "summary.txt", "w", encoding="utf-8") as f:
        f.write(summary)
    print(summary, end="")
    return out_dir


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Train an epsilon-greedy bandit on a CSV reward table")
    p.add_argument("--data", required=True, help="CSV with one row per reward observation")
    p.add_argument("--group", nargs="+", required=True, help="Column(s) identifying the arm")
    p.add_argument("--response", required=True, help="Numeric reward column (higher is better)")
    p.add_argument("--steps", type=int, default=1000)
    p.add_argument("--epsilon", type=float, default=DEFAULT_EPSILON)
    p.add_argument("--learning-rate", dest="learning_rate", type=float, default=None,
                   help="Fixed step size; omit for sample-mean updates")
    p.add_argument("--q0", type=float, default=0.0, help="Initial Q for every arm")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--track-history", dest="track_history", action="store_true")
    p.add_argument("--name", default=None, help="Run directory name (derived from params if omitted)")
    p.add_argument("--outdir", default="results")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def main(argv=None) -> None:
    p = build_parser()
    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT, stream=sys.stderr
    )
    try:
        run(args)
    except BanditError as exc:
        p.error(str(exc))


if __name__ == "__main__":
    main()
