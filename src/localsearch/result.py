"""
Result of a local search run.

Bundles the final problem, policy and state. Results compare by best cost
(equal within machine epsilon), so min(results) picks the best of several
independent runs.
"""

from functools import total_ordering
from typing import Any, Optional

from rich.console import Console
from rich.table import Table

from localsearch.core.state import IterState
from localsearch.core.termination import Reason, Status
from localsearch.problem import Problem
from localsearch.strategies.base import EPSILON, Solver


@total_ordering
class RunResult:
	"""Final problem, policy and state of one run."""

	def __init__(self, problem: Problem, solver: Solver, state: IterState):
		self.problem = problem
		self.solver = solver
		self.state = state

	@property
	def solver_name(self) -> str:
		return self.solver.name

	@property
	def best_param(self) -> Optional[Any]:
		return self.state.get_best_param()

	@property
	def best_cost(self) -> float:
		return self.state.get_best_cost()

	@property
	def last_best_iter(self) -> int:
		return self.state.get_last_best_iter()

	@property
	def iterations(self) -> int:
		return self.state.get_iter()

	@property
	def status(self) -> Status:
		return self.state.status

	@property
	def termination_reason(self) -> Optional[Reason]:
		return self.state.termination_reason

	@property
	def time(self) -> Optional[float]:
		return self.state.get_time()

	def rows(self) -> list[tuple[str, str]]:
		"""(label, value) pairs shared by the text and table renderings."""
		best_param = self.best_param
		rows = [
			("Solver", self.solver_name),
			("param (best)", "None" if best_param is None else repr(best_param)),
			("cost (best)", f"{self.best_cost}"),
			("iters (best)", f"{self.last_best_iter}"),
			("iters (total)", f"{self.iterations}"),
			("termination", str(self.status)),
		]
		if self.time is not None:
			rows.append(("time", f"{self.time:.4f}s"))
		return rows

	def __str__(self) -> str:
		lines = ["OptimizationResult:"]
		for label, value in self.rows():
			lines.append(f"    {label + ':':<15}{value}")
		return "\n".join(lines) + "\n"

	def to_table(self) -> Table:
		"""Rich table with the same rows as str()."""
		table = Table(title="OptimizationResult", show_header=False)
		table.add_column("Field", style="cyan")
		table.add_column("Value")
		for label, value in self.rows():
			table.add_row(label, value)
		return table

	def print(self, console: Optional[Console] = None) -> None:
		(console or Console()).print(self.to_table())

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, RunResult):
			return NotImplemented
		return abs(self.best_cost - other.best_cost) < EPSILON

	def __lt__(self, other: 'RunResult') -> bool:
		if not isinstance(other, RunResult):
			return NotImplemented
		return not self == other and self.best_cost < other.best_cost

	def __repr__(self) -> str:
		return (
			f"RunResult(solver={self.solver_name}, best_cost={self.best_cost:.4f}, "
			f"iters={self.iterations}, status={self.status})"
		)
