# ======================== policy.py ========================
"""Epsilon-greedy action selection and the two online update rules.

Both update rules expose the same API:
    rule(state, reward) -> new ValueState

Usage in the trainer:
    rule = make_update_rule(learning_rate)      # once per training run
    i = select_action(store.q, epsilon, rng)
    store.set(i, rule(store.get(i), reward))
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from errors import ConfigurationError
from value_store import ValueState

DEFAULT_EPSILON = 0.05


def check_epsilon(epsilon: float) -> float:
    try:
        eps = float(epsilon)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"epsilon must be a number, got {epsilon!r}") from exc
    # NaN fails both comparisons, so test the accepted range
    if not 0.0 <= eps <= 1.0:
        raise ConfigurationError(f"epsilon must be in [0, 1], got {epsilon!r}")
    return eps


def select_action(q: np.ndarray, epsilon: float, rng: np.random.Generator) -> int:
    """Index of the arm to pull.

    With probability `epsilon` a uniformly random arm (which may be the greedy
    one), otherwise the arm with the largest Q. Ties go to the lowest index.
    """
    if rng.random() <= epsilon:
        return int(rng.integers(len(q)))
    return int(np.argmax(q))


@dataclass(frozen=True)
class SampleMean:
    """Q <- Q + (R - Q) / N, the running mean of rewards when Q0 = 0."""

    def __call__(self, state: ValueState, reward: float) -> ValueState:
        n = state.N + 1.0
        return ValueState(state.Q + (reward - state.Q) / n, n)


@dataclass(frozen=True)
class FixedRate:
    """Q <- Q + eta * (R - Q), an exponentially weighted average."""

    eta: float

    def __call__(self, state: ValueState, reward: float) -> ValueState:
        return ValueState(state.Q + self.eta * (reward - state.Q), state.N + 1.0)


UpdateRule = Union[SampleMean, FixedRate]


def make_update_rule(learning_rate: Optional[float] = None) -> UpdateRule:
    if learning_rate is None:
        return SampleMean()
    try:
        eta = float(learning_rate)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"learning_rate must be a number, got {learning_rate!r}") from exc
    if math.isnan(eta):
        raise ConfigurationError("learning_rate must not be NaN")
    return FixedRate(eta)
