"""
Tabu Search policy.

Each iteration draws a batch of neighbor moves, evaluates the resulting
params in parallel, discards any whose param is already in the tabu list,
and moves toward the cheapest survivor. The selected param is always pushed
onto the tabu list (oldest entry evicted at capacity), whether or not the
move is accepted.

Acceptance follows an implicit cooling schedule: strictly improving moves
are always taken, others with probability
	1 / (1 + (iter + 1) ** (delta / init_temp))
so worsening moves become less likely as the run ages.
"""

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Optional

from localsearch.core.state import IterState, clone_param
from localsearch.problem import CostFunction, Neighborhood, Problem
from localsearch.strategies.base import (
	SearchPolicyConfig,
	Solver,
	annealing_accept,
	argmin,
	evaluate_candidates,
	params_equal,
)


@dataclass
class TabuSearchConfig(SearchPolicyConfig):
	"""
	Configuration for Tabu Search.

	tabu_size: capacity of the tabu list (recently selected params)
	init_temp: temperature scaling the acceptance of worsening moves
	stall_accepted_limit: recorded, not consulted by any stop condition
	"""
	neighbors_per_iter: Optional[int] = 10
	tabu_size: int = 20
	init_temp: float = 100.0
	stall_accepted_limit: Optional[int] = None

	def __post_init__(self):
		super().__post_init__()
		if self.tabu_size < 1:
			raise ValueError(f"tabu_size must be >= 1, got {self.tabu_size}")
		if self.init_temp <= 0:
			raise ValueError(f"init_temp must be > 0, got {self.init_temp}")


class TabuSearch(Solver):
	"""
	Tabu Search with annealing-style acceptance.

	Requires CostFunction + Neighborhood. Params must support == (numpy arrays
	are compared element-wise) so the tabu list can recognise a revisited param.
	"""

	NAME = "TabuSearch"

	def __init__(
		self,
		config: Optional[TabuSearchConfig] = None,
		rng: Optional[random.Random] = None,
		seed: Optional[int] = None,
		logger: Optional[Callable[[str], None]] = None,
		log_level: int = logging.INFO,
	):
		super().__init__(config or TabuSearchConfig(), rng=rng, seed=seed, logger=logger, log_level=log_level)
		self._tabu_list: deque = deque(maxlen=self._config.tabu_size)

	@property
	def config(self) -> TabuSearchConfig:
		return self._config

	@property
	def tabu_list(self) -> list:
		"""Snapshot of the tabu list, oldest first."""
		return list(self._tabu_list)

	def is_tabu(self, param: Any) -> bool:
		return any(params_equal(param, entry) for entry in self._tabu_list)

	def init(self, problem: Problem, state: IterState) -> IterState:
		problem.require(CostFunction, Neighborhood)
		return self._initial_cost(problem, state)

	def next_iter(self, problem: Problem, state: IterState) -> IterState:
		cfg = self._config
		prev_param = self._current(state)
		prev_cost = state.get_cost()

		neighbors = problem.neighbors(self._rng, prev_param, cfg.neighbors_per_iter)

		def evaluate(neighbor):
			param = problem.move(prev_param, neighbor)
			return param, problem.cost(param)

		candidates = evaluate_candidates(evaluate, neighbors, cfg.n_jobs)
		survivors = [(p, c) for p, c in candidates if not self.is_tabu(p)]
		self._log.trace(
			f"[{self.NAME}] iter {state.get_iter()}: {len(candidates)} candidates, "
			f"{len(candidates) - len(survivors)} tabu"
		)

		idx = argmin([c for _, c in survivors])
		if idx is None:
			new_param, new_cost = clone_param(prev_param), prev_cost
		else:
			new_param, new_cost = survivors[idx]

		self._tabu_list.append(new_param)

		delta = new_cost - prev_cost
		accepted = annealing_accept(delta, state.get_iter(), cfg.init_temp, self._rng)
		new_best = new_cost < state.get_best_cost()
		self._stall.update(accepted, new_best)

		self._log.debug(
			f"[{self.NAME}] iter {state.get_iter()}: candidate={new_cost:.4f}, "
			f"delta={delta:+.4f}, accepted={accepted}, stall_best={self._stall.best}"
		)

		if accepted:
			return state.param(new_param).cost(new_cost)
		return state.param(prev_param).cost(prev_cost)

	def __repr__(self) -> str:
		return f"TabuSearch(config={self._config}, seed={self._seed}, tabu={len(self._tabu_list)})"
