"""
Guided Local Search policy.

Same buffered sweep as VariableNeighborhood, but moves are ranked by their
augmented delta (true delta plus lambda times the penalties of the features
the move touches) and only strictly improving augmented moves are accepted.

When a full sweep of the neighborhood ends without any acceptance the search
sits in a local optimum of the augmented cost. The escape step then:
1. increments the penalty of every feature present in the current param
2. rescales lambda = alpha * cost(current) / feature_count(current)
3. force-accepts the best candidate of the last batch

Penalty memory is owned by the policy and survives across iterations and
resumed runs; only calibrate_penalty() / replace_penalty() reset it.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional

from localsearch.core.state import IterState, clone_param
from localsearch.problem import AugmentedNeighborhood, CostFunction, Penalty, Problem
from localsearch.strategies.base import (
	SearchPolicyConfig,
	Solver,
	argmin,
	evaluate_candidates,
	is_improving,
)


@dataclass
class GuidedLocalSearchConfig(SearchPolicyConfig):
	"""
	Configuration for Guided Local Search.

	alpha: coefficient rescaling lambda after each escape step
	neighborhood_size: moves requested when the buffer is refilled (None = problem default)
	"""
	neighbors_per_iter: Optional[int] = 10
	neighborhood_size: Optional[int] = None
	alpha: float = 0.3

	def __post_init__(self):
		super().__post_init__()
		if self.neighborhood_size is not None and self.neighborhood_size < 1:
			raise ValueError(f"neighborhood_size must be >= 1, got {self.neighborhood_size}")
		if self.alpha <= 0:
			raise ValueError(f"alpha must be > 0, got {self.alpha}")


class GuidedLocalSearch(Solver):
	"""
	Guided Local Search with feature penalties.

	Requires CostFunction + AugmentedNeighborhood.
	"""

	NAME = "GuidedLocalSearch"

	def __init__(
		self,
		config: Optional[GuidedLocalSearchConfig] = None,
		rng: Optional[random.Random] = None,
		seed: Optional[int] = None,
		logger: Optional[Callable[[str], None]] = None,
		log_level: int = logging.INFO,
	):
		super().__init__(config or GuidedLocalSearchConfig(), rng=rng, seed=seed, logger=logger, log_level=log_level)
		self._penalty: Penalty = Penalty(alpha=self._config.alpha)
		self._buffer: Optional[list] = None
		self._escapes = 0

	@property
	def config(self) -> GuidedLocalSearchConfig:
		return self._config

	@property
	def penalty(self) -> Penalty:
		return self._penalty

	@property
	def escapes(self) -> int:
		"""Number of escape steps taken so far."""
		return self._escapes

	@property
	def pending_neighbors(self) -> int:
		return len(self._buffer) if self._buffer else 0

	def replace_penalty(self, penalty: Penalty) -> 'GuidedLocalSearch':
		self._penalty = penalty
		return self

	def calibrate_penalty(self, ratio: float) -> None:
		self._penalty.calibrate(ratio)

	def init(self, problem: Problem, state: IterState) -> IterState:
		problem.require(CostFunction, AugmentedNeighborhood)
		param = self._current(state)
		cost = problem.cost(param)
		self._log.debug(f"[{self.NAME}] Initial cost: {cost:.4f}")
		return state.param(param).cost(cost)

	def _drain(self, problem: Problem, param) -> tuple[list, list]:
		buffer = self._buffer
		if not buffer:
			buffer = problem.neighbors(self._rng, param, self._config.neighborhood_size)
		cap = self._config.neighbors_per_iter
		if cap is None:
			return buffer, []
		return buffer[:cap], buffer[cap:]

	def _escape(self, problem: Problem, param, cost: float) -> None:
		"""Penalize the features of the local optimum and rescale lambda."""
		problem.update_penalty(param, self._penalty)
		features = problem.feature_count(param)
		if features > 0:
			self._penalty.lambda_ = self._penalty.alpha * cost / features
		self._escapes += 1
		self._log.debug(
			f"[{self.NAME}] Escape #{self._escapes}: cost={cost:.4f}, "
			f"features={features}, lambda={self._penalty.lambda_:.4f}"
		)

	def next_iter(self, problem: Problem, state: IterState) -> IterState:
		cfg = self._config
		prev_param = self._current(state)
		prev_cost = state.get_cost()

		batch, remaining = self._drain(problem, prev_param)
		penalty = self._penalty
		deltas = evaluate_candidates(
			lambda n: problem.augmented_delta(prev_param, n, penalty), batch, cfg.n_jobs
		)
		self._log.trace(f"[{self.NAME}] iter {state.get_iter()}: {len(batch)} evaluated, {len(remaining)} pending")

		idx = argmin(deltas)
		if idx is None:
			new_param, delta = clone_param(prev_param), 0.0
		else:
			new_param, delta = problem.move(prev_param, batch[idx]), deltas[idx]

		accepted = is_improving(delta)
		new_cost = problem.cost(new_param)
		self._stall.update(accepted, new_cost < state.get_best_cost())

		self._buffer = remaining or None
		if self._buffer is None and not accepted:
			# Sweep exhausted in an augmented local optimum
			self._escape(problem, prev_param, prev_cost)
			accepted = True

		self._log.debug(
			f"[{self.NAME}] iter {state.get_iter()}: candidate={new_cost:.4f}, "
			f"augmented_delta={delta:+.4f}, accepted={accepted}"
		)

		if accepted:
			self._buffer = None
			return state.param(new_param).cost(new_cost)
		return state.param(prev_param).cost(prev_cost)

	def __repr__(self) -> str:
		return f"GuidedLocalSearch(config={self._config}, seed={self._seed}, penalty={self._penalty})"
