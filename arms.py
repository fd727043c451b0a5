"""Arm registry: the fixed set of arms and the reward pool each one owns.

Pools are plain float64 arrays. `sample_reward` draws one observation
uniformly with replacement and consumes exactly one value from the
generator, so a seeded run replays the same draws.
"""
from __future__ import annotations

from typing import Hashable, Iterable, Mapping, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from errors import ConfigurationError

Arm = Hashable


class ArmRegistry:
    """Ordered arms -> reward pools. Arms cannot be added or removed."""

    def __init__(self, pools: Mapping[Arm, Iterable[float]]):
        arms = []
        arrays = []
        for arm, rewards in pools.items():
            try:
                arr = np.asarray(list(rewards), dtype=np.float64)
            except (TypeError, ValueError) as exc:
                raise ConfigurationError(f"Rewards for arm {arm!r} are not numeric") from exc
            if arr.size == 0:
                raise ConfigurationError(f"Reward pool for arm {arm!r} is empty")
            arr.setflags(write=False)
            arms.append(arm)
            arrays.append(arr)
        if not arms:
            raise ConfigurationError("Need at least one arm")

        self._arms: Tuple[Arm, ...] = tuple(arms)
        self._pools: Tuple[np.ndarray, ...] = tuple(arrays)
        self._index = {a: i for i, a in enumerate(self._arms)}

    @classmethod
    def from_frame(
        cls,
        data: pd.DataFrame,
        groups: Union[str, Sequence[str]],
        response: str,
    ) -> "ArmRegistry":
        """One arm per distinct value of `groups`, pooling `response`.

        A single grouping column (as a string or a one-element list) gives
        scalar arm labels, several give tuples. Rows with a missing grouping
        value are rejected rather than dropped.
        Arms are registered in order of first appearance. Missing responses
        are dropped before pooling.
        """
        cols = [groups] if isinstance(groups, str) else list(groups)
        if not cols:
            raise ConfigurationError("Need at least one grouping column")
        missing = [c for c in cols + [response] if c not in data.columns]
        if missing:
            raise ConfigurationError(f"Columns not found in data: {missing}")
        if not pd.api.types.is_numeric_dtype(data[response]):
            raise ConfigurationError(f"Response column {response!r} is not numeric")

        no_key = data[cols].isna().any(axis=1)
        if no_key.any():
            raise ConfigurationError(
                f"{int(no_key.sum())} rows have a missing value in grouping columns {cols}"
            )

        # all-NaN arms still form a group here and are rejected below
        key = cols[0] if len(cols) == 1 else cols
        pools = {}
        for arm, g in data.groupby(key, sort=False, observed=True):
            y = g[response].dropna()
            if y.empty:
                raise ConfigurationError(f"Reward pool for arm {arm!r} is empty")
            pools[arm] = y.to_numpy(dtype=np.float64)
        return cls(pools)

    # ----------------- lookups -----------------
    def list_arms(self) -> Tuple[Arm, ...]:
        return self._arms

    def __len__(self) -> int:
        return len(self._arms)

    def __iter__(self):
        return iter(self._arms)

    def __contains__(self, arm) -> bool:
        return arm in self._index

    def index(self, arm: Arm) -> int:
        try:
            return self._index[arm]
        except KeyError:
            raise KeyError(f"Unknown arm: {arm!r}") from None

    def pool(self, arm: Arm) -> np.ndarray:
        return self._pools[self.index(arm)]

    # ----------------- sampling -----------------
    def sample_reward(self, arm: Arm, rng: np.random.Generator) -> float:
        return self.draw(self.index(arm), rng)

    def draw(self, idx: int, rng: np.random.Generator) -> float:
        """Draw one reward for the arm at position `idx`."""
        pool = self._pools[idx]
        return float(pool[rng.integers(pool.size)])

    def __repr__(self) -> str:
        sizes = ", ".join(f"{a!r}: {p.size}" for a, p in zip(self._arms, self._pools))
        return f"ArmRegistry({{{sizes}}})"
