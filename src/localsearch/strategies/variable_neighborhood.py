"""
Variable Neighborhood policy.

Keeps a buffer of not-yet-evaluated neighbor moves across iterations. Each
iteration drains up to neighbors_per_iter moves from the buffer (requesting
a fresh neighborhood when it is empty), ranks them by their cheap delta and
tries the best one with the same annealing rule as Tabu Search.

- Accepted: the rest of the buffer is discarded and the neighborhood is
  rebuilt around the new point on the next iteration.
- Rejected: the rest of the buffer is kept, so the sweep of the current
  neighborhood continues before giving up on it.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional

from localsearch.core.state import IterState
from localsearch.problem import CostFunction, Neighborhood, Problem
from localsearch.strategies.base import (
	SearchPolicyConfig,
	Solver,
	annealing_accept,
	argmin,
	evaluate_candidates,
)


@dataclass
class VariableNeighborhoodConfig(SearchPolicyConfig):
	"""
	Configuration for Variable Neighborhood search.

	neighborhood_size: moves requested when the buffer is refilled (None = problem default)
	init_temp: temperature scaling the acceptance of worsening moves
	stall_accepted_limit: recorded, not consulted by any stop condition
	"""
	neighbors_per_iter: Optional[int] = 10
	neighborhood_size: Optional[int] = None
	init_temp: float = 100.0
	stall_accepted_limit: Optional[int] = None

	def __post_init__(self):
		super().__post_init__()
		if self.neighborhood_size is not None and self.neighborhood_size < 1:
			raise ValueError(f"neighborhood_size must be >= 1, got {self.neighborhood_size}")
		if self.init_temp <= 0:
			raise ValueError(f"init_temp must be > 0, got {self.init_temp}")


class VariableNeighborhood(Solver):
	"""
	Variable Neighborhood sweep with annealing-style acceptance.

	Requires CostFunction + Neighborhood; uses the problem's delta() when it
	has one, a full cost difference otherwise.
	"""

	NAME = "VariableNeighborhood"

	def __init__(
		self,
		config: Optional[VariableNeighborhoodConfig] = None,
		rng: Optional[random.Random] = None,
		seed: Optional[int] = None,
		logger: Optional[Callable[[str], None]] = None,
		log_level: int = logging.INFO,
	):
		super().__init__(config or VariableNeighborhoodConfig(), rng=rng, seed=seed, logger=logger, log_level=log_level)
		self._buffer: Optional[list] = None

	@property
	def config(self) -> VariableNeighborhoodConfig:
		return self._config

	@property
	def pending_neighbors(self) -> int:
		"""Moves left in the current neighborhood sweep."""
		return len(self._buffer) if self._buffer else 0

	def init(self, problem: Problem, state: IterState) -> IterState:
		problem.require(CostFunction, Neighborhood)
		return self._initial_cost(problem, state)

	def _drain(self, problem: Problem, param) -> tuple[list, list]:
		"""Split off the next batch, refilling the buffer first when empty."""
		buffer = self._buffer
		if not buffer:
			buffer = problem.neighbors(self._rng, param, self._config.neighborhood_size)
		cap = self._config.neighbors_per_iter
		if cap is None:
			return buffer, []
		return buffer[:cap], buffer[cap:]

	def next_iter(self, problem: Problem, state: IterState) -> IterState:
		cfg = self._config
		prev_param = self._current(state)
		prev_cost = state.get_cost()

		batch, remaining = self._drain(problem, prev_param)
		deltas = evaluate_candidates(lambda n: problem.delta(prev_param, n), batch, cfg.n_jobs)
		self._log.trace(f"[{self.NAME}] iter {state.get_iter()}: {len(batch)} evaluated, {len(remaining)} pending")

		idx = argmin(deltas)
		if idx is None:
			# Empty neighborhood: stay put
			self._buffer = None
			self._stall.update(False, False)
			return state.param(prev_param).cost(prev_cost)

		delta = deltas[idx]
		new_param = problem.move(prev_param, batch[idx])
		new_cost = prev_cost + delta

		accepted = annealing_accept(delta, state.get_iter(), cfg.init_temp, self._rng)
		new_best = new_cost < state.get_best_cost()
		self._stall.update(accepted, new_best)

		self._log.debug(
			f"[{self.NAME}] iter {state.get_iter()}: candidate={new_cost:.4f}, "
			f"delta={delta:+.4f}, accepted={accepted}, stall_best={self._stall.best}"
		)

		if accepted:
			self._buffer = None
			return state.param(new_param).cost(new_cost)
		self._buffer = remaining or None
		return state.param(prev_param).cost(prev_cost)

	def __repr__(self) -> str:
		return f"VariableNeighborhood(config={self._config}, seed={self._seed}, pending={self.pending_neighbors})"
