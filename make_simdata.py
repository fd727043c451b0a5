# make_simdata.py
"""Write a simulated long-form reward table (one row per observation).

Five arms A..E drawn from Normal(mu, sd); the best arm is E:
    E > D > C > B > A
"""
import argparse
import os

import numpy as np
import pandas as pd

ARMS = [
    # (label, mean, sd)
    ("A", -0.3, 1.0),
    ("B", 0.0, 0.5),
    ("C", 0.5, 0.3),
    ("D", 0.8, 0.3),
    ("E", 1.1, 0.5),
]


def simulate(n: int = 1000, seed: int = 101, arms=ARMS) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    frames = [
        pd.DataFrame({"Arm": label, "Y": rng.normal(mu, sd, n)})
        for label, mu, sd in arms
    ]
    return pd.concat(frames, ignore_index=True)


def main():
    ap = argparse.ArgumentParser(description="Simulate per-arm reward samples")
    ap.add_argument("--n", type=int, default=1000, help="samples per arm")
    ap.add_argument("--seed", type=int, default=101)
    ap.add_argument("--out", default="data/simdata.csv")
    args = ap.parse_args()

    df = simulate(args.n, args.seed)
    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
    df.to_csv(args.out, index=False)

    stats = df.groupby("Arm")["Y"].agg(["count", "mean", "std"])
    print(stats.to_string(float_format=lambda x: f"{x:.3f}"))
    print(f"Wrote {args.out}")


if __name__ == "__main__":
    main()
