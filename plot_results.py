# plot_results.py  (Q trajectory per arm for every tracked run)
from pathlib import Path

import pandas as pd
import matplotlib.pyplot as plt

RESULTS_DIR = Path("results")
PLOTS_DIR = RESULTS_DIR / "plots"


def load_histories(results_dir: Path = RESULTS_DIR) -> dict:
    runs = {}
    if not results_dir.exists():
        print(f"No {results_dir}/ directory found.")
        return runs
    for sub in sorted(results_dir.iterdir()):
        if not sub.is_dir():
            continue
        hist = sub / "history.csv"
        if hist.exists():
            runs[sub.name] = pd.read_csv(hist)
    return runs


def plot_history(df: pd.DataFrame, title: str, outfile: Path) -> None:
    fig, ax = plt.subplots(figsize=(6.8, 4.0))
    for arm, g in df.groupby("arm", sort=False):
        g = g.sort_values("step")
        ax.plot(g["step"], g["Q"], label=str(arm), linewidth=1.2)
    ax.set_xlabel("Step")
    ax.set_ylabel("Q")
    ax.set_title(title)
    ax.grid(True, linestyle="--", alpha=0.4)
    ax.legend(title="arm")
    fig.tight_layout()
    fig.savefig(outfile, dpi=160)
    plt.close(fig)


def main(results_dir: Path = RESULTS_DIR, plots_dir: Path = PLOTS_DIR):
    runs = load_histories(results_dir)
    if not runs:
        print(f"No history.csv found under {results_dir}/. Run replay_driver.py --track-history first.")
        return []

    plots_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for name, df in runs.items():
        out = plots_dir / f"{name}_q.png"
        plot_history(df, f"Q by arm ({name})", out)
        written.append(out)

    print(f"Saved {len(written)} plots to {plots_dir.resolve()}")
    return written


if __name__ == "__main__":
    main()
