"""Per-arm value estimates Q and pull counts N.
`get(i)` returns a ValueState, `set(i, state)` writes one back.
Arrays are indexed by the arm registry's order and never resized."""
from __future__ import annotations

from typing import NamedTuple

import numpy as np

# Width of the uniform jitter added to Q0 so that arms are not exactly tied
INIT_JITTER = 1e-10


class ValueState(NamedTuple):
    Q: float
    N: float


class ValueStore:
    def __init__(self, q, n):
        # Use float64 for headroom
        self.q = np.array(q, dtype=np.float64)
        self.n = np.array(n, dtype=np.float64)
        if self.q.shape != self.n.shape or self.q.ndim != 1:
            raise ValueError("q and n must be 1-d arrays of the same length")

    @classmethod
    def initialise(cls, n_arms: int, q0: float, rng: np.random.Generator) -> "ValueStore":
        q0 = float(q0)
        q = rng.uniform(q0, q0 + INIT_JITTER, size=n_arms)
        return cls(q, np.zeros(n_arms))

    def __len__(self) -> int:
        return self.q.size

    def get(self, i: int) -> ValueState:
        return ValueState(float(self.q[i]), float(self.n[i]))

    def set(self, i: int, state: ValueState) -> None:
        if not 0 <= i < self.q.size:
            raise IndexError(f"arm index {i} out of range")
        if state.N < 0:
            raise ValueError("N must be non-negative")
        self.q[i] = state.Q
        self.n[i] = state.N

    def snapshot(self) -> "ValueStore":
        return ValueStore(self.q, self.n)

    def __eq__(self, other):
        if not isinstance(other, ValueStore):
            return NotImplemented
        return np.array_equal(self.q, other.q) and np.array_equal(self.n, other.n)

    def __repr__(self) -> str:
        return f"ValueStore(q={self.q.tolist()}, n={self.n.tolist()})"
