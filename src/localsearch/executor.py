"""
Executor: drives one local search run.

The Executor owns the problem and the iteration state. Each iteration it
lends both to the policy, gets the updated state back, applies best-tracking,
advances the counter and stamps the elapsed time, then re-evaluates the stop
condition. The loop is single-threaded; an interrupt request is honoured only
between completed iterations.

Usage:
	result = (
		Executor(problem, TabuSearch(seed=42))
		.configure(lambda s: s.param(initial).target_cost(0.0).max_iters(10_000))
		.run()
	)
	print(result)

Resuming:
	state = result.state.snapshot().max_iters(20_000)
	result = Executor(problem, result.solver, state=state).run()

An Executor is single-use: its state slot is consumed by run().
"""

import logging
import signal
import threading
import time
from typing import Any, Callable, Optional

from localsearch.config import RunConfig
from localsearch.core.errors import LocalSearchError, NotInitializedError
from localsearch.core.state import IterState
from localsearch.core.termination import Reason
from localsearch.logger import SearchLogger
from localsearch.problem import Problem
from localsearch.result import RunResult
from localsearch.strategies.base import Solver


class Executor:
	"""
	Composes a problem, a policy and an iteration state and runs the loop.

	Args:
		problem: The caller's problem object (wrapped in Problem if needed)
		solver: Policy implementing the Solver contract
		state: Existing state to resume from (default: fresh IterState)
		timer: Record cumulative elapsed time in the state
		logger: Optional logging callable receiving each enabled message
		log_level: Level of the executor's SearchLogger
		observer: Called with the state after every completed iteration
		handle_signals: Turn SIGINT/SIGTERM into a cooperative interrupt during run()
	"""

	def __init__(
		self,
		problem: Any,
		solver: Solver,
		state: Optional[IterState] = None,
		timer: bool = True,
		logger: Optional[Callable[[str], None]] = None,
		log_level: int = logging.INFO,
		observer: Optional[Callable[[IterState], None]] = None,
		handle_signals: bool = False,
	):
		self._problem = problem if isinstance(problem, Problem) else Problem(problem)
		self._solver = solver
		self._state: Optional[IterState] = state if state is not None else IterState()
		self._timer = timer
		self._observer = observer
		self._handle_signals = handle_signals
		self._interrupt = threading.Event()
		self._log = SearchLogger("Executor", level=log_level, file_logger=logger)

	@property
	def solver(self) -> Solver:
		return self._solver

	@property
	def problem(self) -> Problem:
		return self._problem

	def configure(self, init: Callable[[IterState], IterState]) -> 'Executor':
		"""Apply init to the state before the run."""
		if self._state is None:
			raise NotInitializedError()
		self._state = init(self._state)
		return self

	def configure_from(self, run_config: RunConfig) -> 'Executor':
		"""Apply the run-level options of a RunConfig."""
		self._timer = run_config.timer
		return self.configure(run_config.apply)

	def timer(self, enabled: bool) -> 'Executor':
		self._timer = enabled
		return self

	def interrupt(self) -> None:
		"""Request a stop after the iteration in progress completes."""
		self._interrupt.set()

	@property
	def interrupted(self) -> bool:
		return self._interrupt.is_set()

	def _handle_signal(self, signum, frame) -> None:
		self._log.warning(f"Received signal {signum}, stopping after current iteration...")
		self._interrupt.set()

	def run(self) -> RunResult:
		"""
		Run the search until a stop condition fires.

		Raises:
			NotInitializedError: state already consumed, or no initial param
			LocalSearchError: any problem failure (the run is aborted)
		"""
		state, self._state = self._state, None
		if state is None:
			raise NotInitializedError()

		previous_handlers = {}
		if self._handle_signals:
			for signum in (signal.SIGINT, signal.SIGTERM):
				previous_handlers[signum] = signal.signal(signum, self._handle_signal)
		try:
			state = self._run_loop(state)
		except LocalSearchError as exc:
			self._log.error(f"[{self._solver.name}] Run aborted: {exc}")
			raise
		finally:
			for signum, handler in previous_handlers.items():
				signal.signal(signum, handler)

		return RunResult(self._problem, self._solver, state)

	def _run_loop(self, state: IterState) -> IterState:
		solver = self._solver
		name = solver.name
		start = time.perf_counter()
		base_time = state.get_time() or 0.0

		# init only on a fresh state: a resumed state carries policy memory
		# (tabu list, penalties) that init could overwrite
		if state.get_iter() == 0:
			if state.get_param() is None:
				raise NotInitializedError("No initial param configured")
			state = solver.init(self._problem, state)
			state.update()
			self._log.info(f"[{name}] Start: cost={state.get_cost():.4f}")
		else:
			self._log.info(f"[{name}] Resume at iter {state.get_iter()}: best={state.get_best_cost():.4f}")

		while not self._interrupt.is_set():
			if not state.terminated:
				status = solver.terminate_internal(state)
				if status.terminated:
					state.terminate_with(status.reason, status.message)
			if state.terminated:
				break

			state = solver.next_iter(self._problem, state)

			state.update()
			improved = state.is_best()
			state.increment_iter()
			if self._timer:
				state.elapsed(base_time + time.perf_counter() - start)

			if improved:
				self._log.debug(f"[{name}] iter {state.get_iter()}: new best={state.get_best_cost():.4f}")
			else:
				self._log.trace(f"[{name}] iter {state.get_iter()}: cost={state.get_cost():.4f}, best={state.get_best_cost():.4f}")

			if self._observer is not None:
				self._observer(state)

			if state.terminated:
				break

		if self._interrupt.is_set():
			state.terminate_with(Reason.KEYBOARD_INTERRUPT)

		self._log.info(
			f"[{name}] Stop after {state.get_iter()} iters: best={state.get_best_cost():.4f} "
			f"(iter {state.get_last_best_iter()}), reason: {state.status}"
		)
		return state

	def __repr__(self) -> str:
		return f"Executor(solver={self._solver.name}, timer={self._timer})"
