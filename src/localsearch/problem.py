"""
Problem capabilities consumed by the search policies.

A problem is any object exposing some subset of these capabilities. Each
policy only requires the subset it needs:

- TabuSearch:           CostFunction + Neighborhood
- VariableNeighborhood: CostFunction + DeltaNeighborhood (delta is optional,
                        Problem falls back to a full cost difference)
- GuidedLocalSearch:    CostFunction + AugmentedNeighborhood

Usage:
	class Queens:
		def cost(self, board): ...
		def neighbors(self, rng, board, count=None): ...
		def move(self, board, neighbor): ...

	problem = Problem(Queens())
	problem.require(CostFunction, Neighborhood)
	cost = problem.cost(board)

Evaluation methods (cost, move, delta, augmented_delta) may be invoked
concurrently on independent candidates; they must not mutate the problem.
update_penalty is only ever called from the control thread.
"""

from dataclasses import dataclass, field
from random import Random
from typing import Any, Generic, Hashable, Iterable, Optional, Protocol, Sequence, TypeVar, runtime_checkable

from localsearch.core.errors import (
	FailGenCandidateStateError,
	FailGenRandomStateError,
	LocalSearchError,
)

F = TypeVar('F', bound=Hashable)


@runtime_checkable
class CostFunction(Protocol):
	"""Evaluates the cost of a parameter (lower is better)."""

	def cost(self, param: Any) -> float:
		...


@runtime_checkable
class Neighborhood(Protocol):
	"""Generates neighbor moves and applies them."""

	def neighbors(self, rng: Random, param: Any, count: Optional[int] = None) -> Sequence[Any]:
		"""Return candidate moves around param (count=None means the full batch)."""
		...

	def move(self, param: Any, neighbor: Any) -> Any:
		"""Return the new param produced by applying neighbor to param."""
		...


@runtime_checkable
class DeltaNeighborhood(Neighborhood, Protocol):
	"""Neighborhood with a cheap cost difference per move."""

	def delta(self, param: Any, neighbor: Any) -> float:
		...


@dataclass
class Penalty(Generic[F]):
	"""
	Guided local search penalty memory.

	Attributes:
		alpha: Fixed coefficient used to rescale lambda_ after each escape
		lambda_: Weight of the penalty term in the augmented cost
		weights: Accumulated usage weight per feature
	"""
	alpha: float
	lambda_: float = 0.0
	weights: dict = field(default_factory=dict)

	def get(self, feature: F) -> float:
		return self.weights.get(feature, 0.0)

	def increment(self, feature: F, amount: float = 1.0) -> None:
		self.weights[feature] = self.weights.get(feature, 0.0) + amount

	def total(self, features: Iterable[F]) -> float:
		"""Sum of the penalties of the given features."""
		return sum(self.weights.get(f, 0.0) for f in features)

	def calibrate(self, ratio: float) -> None:
		"""Clear accumulated weights and set lambda_ = alpha * ratio."""
		self.weights.clear()
		self.lambda_ = self.alpha * ratio

	def __repr__(self) -> str:
		return f"Penalty(alpha={self.alpha}, lambda_={self.lambda_:.4f}, features={len(self.weights)})"


@runtime_checkable
class AugmentedNeighborhood(DeltaNeighborhood, Protocol):
	"""Neighborhood aware of guided local search penalties."""

	def augmented_delta(self, param: Any, neighbor: Any, penalty: Penalty) -> float:
		"""delta(param, neighbor) + penalty.lambda_ * penalties of the touched features."""
		...

	def update_penalty(self, param: Any, penalty: Penalty) -> None:
		"""Increment the penalty of every feature present in param."""
		...

	def feature_count(self, param: Any) -> int:
		...


class Problem:
	"""
	Adapter around the caller's problem object.

	Converts arbitrary failures raised by the caller into engine error kinds
	(the original exception is chained). Engine errors raised by the caller
	pass through unchanged.
	"""

	def __init__(self, problem: Any):
		self._problem = problem

	@property
	def inner(self) -> Any:
		"""The wrapped problem object."""
		return self._problem

	def require(self, *capabilities: type) -> None:
		"""Raise TypeError unless the wrapped problem satisfies every capability."""
		missing = [c.__name__ for c in capabilities if not isinstance(self._problem, c)]
		if missing:
			raise TypeError(
				f"{type(self._problem).__name__} does not implement: {', '.join(missing)}"
			)

	def cost(self, param: Any) -> float:
		try:
			return float(self._problem.cost(param))
		except LocalSearchError:
			raise
		except Exception as exc:
			raise FailGenCandidateStateError(f"cost evaluation failed: {exc}") from exc

	def neighbors(self, rng: Random, param: Any, count: Optional[int] = None) -> list:
		try:
			return list(self._problem.neighbors(rng, param, count))
		except LocalSearchError:
			raise
		except Exception as exc:
			raise FailGenRandomStateError(f"neighbor generation failed: {exc}") from exc

	def move(self, param: Any, neighbor: Any) -> Any:
		try:
			return self._problem.move(param, neighbor)
		except LocalSearchError:
			raise
		except Exception as exc:
			raise FailGenCandidateStateError(f"move failed: {exc}") from exc

	def delta(self, param: Any, neighbor: Any) -> float:
		"""Cheap delta when the problem provides one, full cost difference otherwise."""
		if not isinstance(self._problem, DeltaNeighborhood):
			return self.cost(self.move(param, neighbor)) - self.cost(param)
		try:
			return float(self._problem.delta(param, neighbor))
		except LocalSearchError:
			raise
		except Exception as exc:
			raise FailGenCandidateStateError(f"delta evaluation failed: {exc}") from exc

	def augmented_delta(self, param: Any, neighbor: Any, penalty: Penalty) -> float:
		try:
			return float(self._problem.augmented_delta(param, neighbor, penalty))
		except LocalSearchError:
			raise
		except Exception as exc:
			raise FailGenCandidateStateError(f"augmented delta evaluation failed: {exc}") from exc

	def update_penalty(self, param: Any, penalty: Penalty) -> None:
		try:
			self._problem.update_penalty(param, penalty)
		except LocalSearchError:
			raise
		except Exception as exc:
			raise FailGenCandidateStateError(f"penalty update failed: {exc}") from exc

	def feature_count(self, param: Any) -> int:
		try:
			return int(self._problem.feature_count(param))
		except LocalSearchError:
			raise
		except Exception as exc:
			raise FailGenCandidateStateError(f"feature count failed: {exc}") from exc

	def __repr__(self) -> str:
		return f"Problem({self._problem!r})"
