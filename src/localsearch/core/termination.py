"""
Termination model.

A run is either still running or stopped for exactly one Reason. The reason
is decided once, when the run loop stops, and never changes afterwards.

Usage:
	from localsearch.core.termination import Reason, Status

	status = Status.stopped(Reason.TARGET_COST_REACHED)
	if status.terminated:
		print(status)  # "Target cost value reached"
"""

from dataclasses import dataclass
from enum import IntEnum, auto
from typing import Optional


class Reason(IntEnum):
	"""Why the search stopped."""
	MAX_ITERS_REACHED = auto()
	MAX_TIME_REACHED = auto()
	MAX_STALL_BEST_REACHED = auto()
	TARGET_COST_REACHED = auto()
	KEYBOARD_INTERRUPT = auto()
	SOLVER_CONVERGED = auto()
	SOLVER_EXIT = auto()  # Custom message supplied by the policy

	def describe(self, message: Optional[str] = None) -> str:
		"""Human-readable text for this reason."""
		if self is Reason.SOLVER_EXIT:
			return message or "Undefined"
		return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
	Reason.MAX_ITERS_REACHED: "Maximum number of iterations reached",
	Reason.MAX_TIME_REACHED: "Maximum time reached",
	Reason.MAX_STALL_BEST_REACHED: "Maximum stall best reached",
	Reason.TARGET_COST_REACHED: "Target cost value reached",
	Reason.KEYBOARD_INTERRUPT: "Keyboard interrupt",
	Reason.SOLVER_CONVERGED: "Solver converged",
}


@dataclass(frozen=True)
class Status:
	"""
	Termination status of a run.

	Attributes:
		reason: Stop cause, None while the search is running
		message: Free text, only meaningful for Reason.SOLVER_EXIT
	"""
	reason: Optional[Reason] = None
	message: Optional[str] = None

	@classmethod
	def running(cls) -> 'Status':
		return cls()

	@classmethod
	def stopped(cls, reason: Reason, message: Optional[str] = None) -> 'Status':
		return cls(reason=reason, message=message)

	@property
	def terminated(self) -> bool:
		return self.reason is not None

	def __str__(self) -> str:
		if self.reason is None:
			return "Running"
		return self.reason.describe(self.message)
