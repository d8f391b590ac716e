"""
Base class and shared numerics for local search policies.

Every policy implements the same three-step contract driven by the Executor:
- init(problem, state):      prepare the initial state (default: identity)
- next_iter(problem, state): advance one iteration (mandatory)
- terminate(state):          policy-specific stop condition

The generic stop decision (terminate_internal) checks, in order:
1. the policy's own terminate()
2. iter >= max_iters          -> MAX_ITERS_REACHED
3. best_cost <= target_cost   -> TARGET_COST_REACHED

Candidate evaluation inside one iteration is a fan-out map (joblib, thread
backend) followed by a minimum reduction. joblib returns results in
submission order and numpy.argmin keeps the first minimum, so exactly-equal
costs always resolve to the lowest candidate index.
"""

import logging
import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

import numpy as np
from joblib import Parallel, delayed

from localsearch.core.errors import BugError
from localsearch.core.state import IterState
from localsearch.core.termination import Reason, Status
from localsearch.logger import SearchLogger
from localsearch.problem import Problem

# Machine epsilon for float64
EPSILON = float(np.finfo(np.float64).eps)


def is_improving(delta: float) -> bool:
	"""Strictly negative beyond floating-point noise. 0 and NaN never improve."""
	return delta < 0 and abs(delta) > EPSILON


def acceptance_probability(delta: float, iteration: int, init_temp: float) -> float:
	"""
	Probability of accepting a non-improving move.

	1 / (1 + (iteration + 1) ** (delta / init_temp)): the iteration index acts
	as the cooling schedule, so late worsening moves become less likely.
	"""
	try:
		return 1.0 / (1.0 + math.pow(iteration + 1, delta / init_temp))
	except OverflowError:
		return 0.0


def annealing_accept(delta: float, iteration: int, init_temp: float, rng: random.Random) -> bool:
	"""Accept if strictly improving, else with acceptance_probability()."""
	if is_improving(delta):
		return True
	return acceptance_probability(delta, iteration, init_temp) > rng.random()


def evaluate_candidates(
	fn: Callable[[Any], Any],
	candidates: Sequence[Any],
	n_jobs: int = 1,
) -> list:
	"""
	Map fn over candidates, in parallel when n_jobs != 1.

	Results are returned in candidate order. Exceptions raised by fn
	propagate to the caller.
	"""
	if n_jobs == 1 or len(candidates) <= 1:
		return [fn(c) for c in candidates]
	return Parallel(n_jobs=n_jobs, prefer="threads")(delayed(fn)(c) for c in candidates)


def params_equal(a: Any, b: Any) -> bool:
	"""
	Equality of two params that also works for numpy arrays.

	Arrays are equal when they have the same shape and every element matches;
	any other type uses its own ==.
	"""
	if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
		if np.shape(a) != np.shape(b):
			return False
		return bool(np.array_equal(a, b))
	eq = a == b
	if isinstance(eq, np.ndarray):
		return bool(eq.all())
	return bool(eq)


def argmin(values: Sequence[float]) -> Optional[int]:
	"""Index of the smallest value (lowest index on ties), None when empty."""
	if len(values) == 0:
		return None
	return int(np.argmin(np.asarray(values, dtype=np.float64)))


@dataclass
class SearchPolicyConfig:
	"""
	Options shared by all policies.

	neighbors_per_iter: cap on candidates evaluated per iteration (None = all)
	stall_best_limit: stop once this many iterations pass without a new best
	n_jobs: joblib workers for candidate evaluation (1 = serial, -1 = all cores)
	enforce_max_time: report MAX_TIME_REACHED once state time >= max_time
	"""
	neighbors_per_iter: Optional[int] = None
	stall_best_limit: Optional[int] = None
	n_jobs: int = 1
	enforce_max_time: bool = False

	def __post_init__(self):
		if self.neighbors_per_iter is not None and self.neighbors_per_iter < 1:
			raise ValueError(f"neighbors_per_iter must be >= 1, got {self.neighbors_per_iter}")
		if self.stall_best_limit is not None and self.stall_best_limit < 0:
			raise ValueError(f"stall_best_limit must be >= 0, got {self.stall_best_limit}")
		if self.n_jobs == 0:
			raise ValueError("n_jobs must be non-zero")


class StallCounter:
	"""Iterations since the last accepted move and since the last new best."""

	def __init__(self):
		self.accepted = 0
		self.best = 0

	def update(self, accepted: bool, new_best: bool) -> None:
		self.accepted = 0 if accepted else self.accepted + 1
		self.best = 0 if new_best else self.best + 1

	def __repr__(self) -> str:
		return f"StallCounter(accepted={self.accepted}, best={self.best})"


class Solver(ABC):
	"""
	Abstract base class for local search policies.

	Subclasses must implement:
	- next_iter(): one step of the search
	- NAME class attribute

	Each policy owns its random generator for the lifetime of the run. Pass
	an explicit rng, or a seed to build a private random.Random.
	"""

	NAME: str = "Solver"

	def __init__(
		self,
		config: SearchPolicyConfig,
		rng: Optional[random.Random] = None,
		seed: Optional[int] = None,
		logger: Optional[Callable[[str], None]] = None,
		log_level: int = logging.INFO,
	):
		self._config = config
		self._seed = seed
		self._rng = rng if rng is not None else random.Random(seed)
		self._log = SearchLogger(self.NAME, level=log_level, file_logger=logger)
		self._stall = StallCounter()

	@property
	def config(self) -> SearchPolicyConfig:
		return self._config

	@property
	def name(self) -> str:
		return self.NAME

	@property
	def rng(self) -> random.Random:
		return self._rng

	@property
	def stall_best(self) -> int:
		return self._stall.best

	@property
	def stall_accepted(self) -> int:
		return self._stall.accepted

	# =========================================================================
	# Contract
	# =========================================================================

	def init(self, problem: Problem, state: IterState) -> IterState:
		"""Prepare the initial state. Default: identity."""
		return state

	@abstractmethod
	def next_iter(self, problem: Problem, state: IterState) -> IterState:
		"""Advance the search by one iteration and return the updated state."""
		...

	def terminate(self, state: IterState) -> Status:
		"""
		Policy-specific stop condition.

		Default: stall-best limit, then the optional wall-clock limit.
		"""
		limit = self._config.stall_best_limit
		if limit is not None and self._stall.best > limit:
			return Status.stopped(Reason.MAX_STALL_BEST_REACHED)
		if self._config.enforce_max_time:
			max_time, elapsed = state.get_max_time(), state.get_time()
			if max_time is not None and elapsed is not None and elapsed >= max_time:
				return Status.stopped(Reason.MAX_TIME_REACHED)
		return Status.running()

	def terminate_internal(self, state: IterState) -> Status:
		"""Fixed-priority stop decision; the first matching condition wins."""
		status = self.terminate(state)
		if status.terminated:
			return status
		if state.get_iter() >= state.get_max_iters():
			return Status.stopped(Reason.MAX_ITERS_REACHED)
		if state.get_best_cost() <= state.get_target_cost():
			return Status.stopped(Reason.TARGET_COST_REACHED)
		return Status.running()

	# =========================================================================
	# Shared helpers
	# =========================================================================

	def _current(self, state: IterState) -> Any:
		param = state.get_param()
		if param is None:
			raise BugError(f"[{self.NAME}] state has no current param")
		return param

	def _initial_cost(self, problem: Problem, state: IterState) -> IterState:
		"""Score the initial param unless the caller already supplied a cost."""
		param = self._current(state)
		cost = state.get_cost()
		if math.isinf(cost):
			cost = problem.cost(param)
		self._log.debug(f"[{self.NAME}] Initial cost: {cost:.4f}")
		return state.param(param).cost(cost)

	def __repr__(self) -> str:
		return f"{self.__class__.__name__}(config={self._config}, seed={self._seed})"
