"""ε-Greedy bandit over discrete arms, each backed by a pool of reward samples."""
from __future__ import annotations

import logging
import numbers
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from arms import Arm, ArmRegistry
from errors import AlreadyTrackingError, ConfigurationError, NoHistoryError
from history import History, summary_frame
from policy import DEFAULT_EPSILON, check_epsilon, make_update_rule, select_action
from value_store import ValueState, ValueStore

logger = logging.getLogger(__name__)

RandomLike = Union[np.random.Generator, int, None]


def _as_generator(rng: RandomLike) -> np.random.Generator:
    # seeds become generators; anything else with the Generator API is used as-is
    if rng is None or isinstance(rng, (numbers.Integral, np.random.SeedSequence)):
        return np.random.default_rng(rng)
    return rng


def check_steps(steps) -> int:
    if isinstance(steps, bool) or not isinstance(steps, numbers.Integral):
        raise ConfigurationError(f"steps must be an integer, got {steps!r}")
    if steps < 0:
        raise ConfigurationError(f"steps must be non-negative, got {steps}")
    return int(steps)


class EpsilonGreedyBandit:
    """Arm registry + value store + optional history, all driven by one generator.

    The generator is consumed in a fixed order: one uniform per arm at
    construction, then per step one draw for the epsilon test, one more when
    exploring, and one for the reward.
    """

    def __init__(
        self,
        registry: ArmRegistry,
        q0: float = 0.0,
        track_history: bool = False,
        rng: RandomLike = None,
    ):
        self.registry = registry
        self.q0 = float(q0)
        self.rng = _as_generator(rng)
        self.store = ValueStore.initialise(len(registry), self.q0, self.rng)
        self.steps_trained = 0
        self.history: Optional[History] = History(self.store) if track_history else None

    # ----------------- state views -----------------
    @property
    def arms(self) -> Tuple[Arm, ...]:
        return self.registry.list_arms()

    def __getitem__(self, arm: Arm) -> ValueState:
        return self.store.get(self.registry.index(arm))

    def __len__(self) -> int:
        return len(self.registry)

    @property
    def values(self) -> np.ndarray:
        return self.store.q.copy()

    @property
    def counts(self) -> np.ndarray:
        return self.store.n.copy()

    def best_arm(self) -> Arm:
        return self.arms[int(np.argmax(self.store.q))]

    # ----------------- training -----------------
    def select(self, epsilon: float = DEFAULT_EPSILON) -> Arm:
        return self.arms[select_action(self.store.q, check_epsilon(epsilon), self.rng)]

    def update(self, arm: Arm, reward: float, learning_rate: Optional[float] = None) -> ValueState:
        i = self.registry.index(arm)
        state = make_update_rule(learning_rate)(self.store.get(i), float(reward))
        self.store.set(i, state)
        return state

    def train(
        self,
        steps: int,
        epsilon: float = DEFAULT_EPSILON,
        learning_rate: Optional[float] = None,
    ) -> "EpsilonGreedyBandit":
        steps = check_steps(steps)
        eps = check_epsilon(epsilon)
        rule = make_update_rule(learning_rate)
        logger.info(
            "training %d steps over %d arms (epsilon=%s, rule=%s)", steps, len(self), eps, rule
        )

        store, registry, rng = self.store, self.registry, self.rng
        for _ in range(steps):
            i = select_action(store.q, eps, rng)
            # draw before writing so a failed draw leaves the arm untouched
            reward = registry.draw(i, rng)
            store.set(i, rule(store.get(i), reward))
            self.steps_trained += 1
            if self.history is not None:
                self.history.append(store)

        logger.debug("training done; best arm %r after %d steps", self.best_arm(), self.steps_trained)
        return self

    # ----------------- history -----------------
    @property
    def is_tracking(self) -> bool:
        return self.history is not None

    def track_history(self) -> None:
        if self.history is not None:
            raise AlreadyTrackingError("Bandit history is already being tracked")
        self.history = History(self.store)
        logger.info("bandit training history will now be tracked")

    def clear_history(self, disable: bool = False) -> None:
        if disable:
            self.history = None
            logger.info("bandit training history cleared and turned off")
        else:
            self.history = History(self.store)
            logger.info("bandit training history cleared")

    def _require_history(self) -> History:
        if self.history is None:
            raise NoHistoryError("No history was tracked")
        return self.history

    def get_history(self) -> Dict[Arm, List[Tuple[float, float]]]:
        """Per arm, the (Q, N) pairs of every snapshot in step order."""
        return self._require_history().per_arm(self.arms)

    def history_frame(self) -> pd.DataFrame:
        return self._require_history().to_frame(self.arms)

    def summary(self) -> pd.DataFrame:
        return summary_frame(self.arms, self.store)

    def __repr__(self) -> str:
        return (
            f"EpsilonGreedyBandit(arms={len(self)}, steps_trained={self.steps_trained}, "
            f"tracking={self.is_tracking})"
        )


def create_bandit(
    data: pd.DataFrame,
    groups: Union[str, Sequence[str]],
    response: str,
    q0: float = 0.0,
    track_history: bool = False,
    rng: RandomLike = None,
) -> EpsilonGreedyBandit:
    """Group `data` by `groups` into arms and start every arm at ~Uniform(q0, q0+1e-10).

    Starting q0 above any achievable reward makes the bandit explore more early on.
    """
    registry = ArmRegistry.from_frame(data, groups, response)
    return EpsilonGreedyBandit(registry, q0=q0, track_history=track_history, rng=rng)


def train(
    bandit: EpsilonGreedyBandit,
    steps: int,
    epsilon: float = DEFAULT_EPSILON,
    learning_rate: Optional[float] = None,
) -> EpsilonGreedyBandit:
    return bandit.train(steps, epsilon=epsilon, learning_rate=learning_rate)
