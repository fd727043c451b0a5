"""Training history and summary views.

History is a list of ValueStore snapshots, one per completed step, with the
state at the moment tracking started at index 0. Nothing in here feeds back
into training.
"""
from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

import numpy as np
import pandas as pd

from value_store import ValueStore


class History:
    def __init__(self, initial: ValueStore):
        self._snaps: List[ValueStore] = [initial.snapshot()]

    def append(self, store: ValueStore) -> None:
        self._snaps.append(store.snapshot())

    def __len__(self) -> int:
        return len(self._snaps)

    def __getitem__(self, step: int) -> ValueStore:
        return self._snaps[step]

    def matrices(self) -> Tuple[np.ndarray, np.ndarray]:
        """(Q, N) stacked as (steps+1, n_arms) arrays."""
        q = np.stack([s.q for s in self._snaps])
        n = np.stack([s.n for s in self._snaps])
        return q, n

    def per_arm(self, arms: Sequence) -> Dict[object, List[Tuple[float, float]]]:
        q, n = self.matrices()
        return {
            arm: list(zip(q[:, j].tolist(), n[:, j].tolist()))
            for j, arm in enumerate(arms)
        }

    def to_frame(self, arms: Sequence) -> pd.DataFrame:
        """Long form: one row per (arm, step), columns arm, step, Q, N."""
        q, n = self.matrices()
        steps = np.arange(q.shape[0])
        parts = [
            pd.DataFrame({"arm": [arm] * steps.size, "step": steps, "Q": q[:, j], "N": n[:, j]})
            for j, arm in enumerate(arms)
        ]
        return pd.concat(parts, ignore_index=True)


def summary_frame(arms: Sequence, store: ValueStore) -> pd.DataFrame:
    return pd.DataFrame({"arm": list(arms), "N": store.n.copy(), "Q": store.q.copy()})
