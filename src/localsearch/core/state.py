"""
Iteration state threaded through a local search run.

The state holds double-buffered "ownership slots" for the parameter and its
cost: installing a new value moves the live one into the previous slot
instead of copying it. Best-tracking runs once per iteration via update().

Usage:
	state = IterState().param(initial).target_cost(0.0).max_iters(1000)
	state.cost(42.0)
	state.update()   # best_cost == 42.0, best_param is a copy of initial
"""

import copy
import math
import sys
from typing import Any, Generic, Optional, TypeVar

from localsearch.core.termination import Reason, Status

P = TypeVar('P')


def clone_param(param: Any) -> Any:
	"""Duplicate a parameter, preferring its own clone() when it has one."""
	clone = getattr(param, "clone", None)
	if callable(clone):
		return clone()
	return copy.deepcopy(param)


class IterState(Generic[P]):
	"""
	Mutable record of one run: current/previous/best param and cost,
	counters, timing and termination status.

	Sentinels after construction:
	- cost, previous cost, best cost, previous best cost: +inf
	- target cost: -inf (never reached)
	- max_iters: unbounded (sys.maxsize)
	- time: 0.0 seconds, max_time: None

	max_time is recorded but not enforced by the generic termination check.
	"""

	def __init__(self):
		self._param: Optional[P] = None
		self._prev_param: Optional[P] = None
		self._best_param: Optional[P] = None
		self._prev_best_param: Optional[P] = None
		self._cost: float = math.inf
		self._prev_cost: float = math.inf
		self._best_cost: float = math.inf
		self._prev_best_cost: float = math.inf
		self._target_cost: float = -math.inf
		self._iter: int = 0
		self._last_best_iter: int = 0
		self._max_iters: int = sys.maxsize
		self._time: Optional[float] = 0.0
		self._max_time: Optional[float] = None
		self._status: Status = Status.running()

	# =========================================================================
	# Fluent setters
	# =========================================================================

	def param(self, param: P) -> 'IterState[P]':
		"""Install a new current param; the old one moves to the previous slot."""
		self._prev_param = self._param
		self._param = param
		return self

	def cost(self, cost: float) -> 'IterState[P]':
		"""Install a new current cost; the old one moves to the previous slot."""
		self._prev_cost = self._cost
		self._cost = float(cost)
		return self

	def target_cost(self, target_cost: float) -> 'IterState[P]':
		self._target_cost = float(target_cost)
		return self

	def max_iters(self, iters: int) -> 'IterState[P]':
		if iters < 0:
			raise ValueError(f"max_iters must be >= 0, got {iters}")
		self._max_iters = int(iters)
		return self

	def max_time(self, seconds: Optional[float]) -> 'IterState[P]':
		self._max_time = None if seconds is None else float(seconds)
		return self

	def elapsed(self, seconds: Optional[float]) -> 'IterState[P]':
		"""Set time spent since the beginning of the optimization."""
		self._time = seconds
		return self

	# =========================================================================
	# Slot access
	# =========================================================================

	def get_param(self) -> Optional[P]:
		return self._param

	def get_prev_param(self) -> Optional[P]:
		return self._prev_param

	def get_best_param(self) -> Optional[P]:
		return self._best_param

	def get_prev_best_param(self) -> Optional[P]:
		return self._prev_best_param

	def take_param(self) -> Optional[P]:
		param, self._param = self._param, None
		return param

	def take_prev_param(self) -> Optional[P]:
		param, self._prev_param = self._prev_param, None
		return param

	def take_best_param(self) -> Optional[P]:
		param, self._best_param = self._best_param, None
		return param

	def take_prev_best_param(self) -> Optional[P]:
		param, self._prev_best_param = self._prev_best_param, None
		return param

	def get_cost(self) -> float:
		return self._cost

	def get_prev_cost(self) -> float:
		return self._prev_cost

	def get_best_cost(self) -> float:
		return self._best_cost

	def get_prev_best_cost(self) -> float:
		return self._prev_best_cost

	def get_target_cost(self) -> float:
		return self._target_cost

	def get_iter(self) -> int:
		return self._iter

	def get_last_best_iter(self) -> int:
		return self._last_best_iter

	def get_max_iters(self) -> int:
		return self._max_iters

	def get_time(self) -> Optional[float]:
		return self._time

	def get_max_time(self) -> Optional[float]:
		return self._max_time

	# =========================================================================
	# Iteration bookkeeping
	# =========================================================================

	def update(self) -> None:
		"""
		Adopt the current param/cost as best if it improves on the best.

		Both costs infinite with the same sign also counts as improving, so
		the very first (unscored) attempt can seed the best slot.
		"""
		cost, best = self._cost, self._best_cost
		improved = cost < best or (
			math.isinf(cost) and math.isinf(best)
			and math.copysign(1.0, cost) == math.copysign(1.0, best)
		)
		if not improved:
			return
		# Without a current param only the best cost moves
		if self._param is not None:
			self._prev_best_param = self._best_param
			self._best_param = clone_param(self._param)
		self._prev_best_cost = self._best_cost
		self._best_cost = cost
		self._last_best_iter = self._iter

	def increment_iter(self) -> None:
		self._iter += 1

	def is_best(self) -> bool:
		"""True when the most recent update() found a new best."""
		return self._last_best_iter == self._iter

	def terminate_with(self, reason: Reason, message: Optional[str] = None) -> 'IterState[P]':
		"""Stop the run. The first reason recorded is kept."""
		if not self._status.terminated:
			self._status = Status.stopped(reason, message)
		return self

	@property
	def status(self) -> Status:
		return self._status

	@property
	def terminated(self) -> bool:
		return self._status.terminated

	@property
	def termination_reason(self) -> Optional[Reason]:
		return self._status.reason

	def snapshot(self) -> 'IterState[P]':
		"""
		Checkpoint copy of this state for resuming in a fresh Executor.

		Slots, counters and timing are deep-copied; the termination status is
		cleared so the resumed run can continue past the original stop.
		"""
		state = copy.deepcopy(self)
		state._status = Status.running()
		return state

	def __repr__(self) -> str:
		return (
			f"IterState(iter={self._iter}, cost={self._cost}, "
			f"best_cost={self._best_cost}, last_best_iter={self._last_best_iter}, "
			f"status={self._status})"
		)
