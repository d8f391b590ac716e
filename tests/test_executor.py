"""
Tests for the Executor run loop.
"""

import signal

import pytest

from localsearch import (
	Executor,
	FailGenCandidateStateError,
	IterState,
	NotInitializedError,
	Reason,
	RunConfig,
	Solver,
	Status,
	TabuSearch,
)
from localsearch.strategies.base import SearchPolicyConfig

from conftest import CostOnly


class Countdown(Solver):
	"""Steps an integer param down by one each iteration (cost = param)."""

	NAME = "Countdown"

	def __init__(self, converge_at=None):
		super().__init__(SearchPolicyConfig(), seed=0)
		self.init_calls = 0
		self.converge_at = converge_at

	def init(self, problem, state):
		self.init_calls += 1
		return state.cost(problem.cost(state.get_param()))

	def next_iter(self, problem, state):
		param = self._current(state) - 1
		return state.param(param).cost(problem.cost(param))

	def terminate(self, state):
		if self.converge_at is not None and state.get_iter() >= self.converge_at:
			return Status.stopped(Reason.SOLVER_CONVERGED)
		return super().terminate(state)


class FailsBelow(CostOnly):
	def cost(self, param):
		if param < 3:
			raise RuntimeError("out of domain")
		return float(param)


def _run(solver, problem=None, **state):
	def init(s):
		s.param(state.get("param", 10))
		if "max_iters" in state:
			s.max_iters(state["max_iters"])
		if "target" in state:
			s.target_cost(state["target"])
		return s

	return Executor(problem or CostOnly(), solver).configure(init).run()


def test_runs_until_max_iters():
	result = _run(Countdown(), max_iters=4)
	assert result.iterations == 4
	assert result.termination_reason == Reason.MAX_ITERS_REACHED
	assert result.best_param == 6
	assert result.best_cost == 6.0
	# Found during the 4th iteration (index 3)
	assert result.last_best_iter == 3


def test_stops_at_target_cost():
	result = _run(Countdown(), param=10, target=3.0)
	assert result.termination_reason == Reason.TARGET_COST_REACHED
	assert result.best_cost == 3.0
	assert result.iterations == 7


def test_zero_iterations_when_initial_state_already_stops():
	assert _run(Countdown(), max_iters=0).iterations == 0
	result = _run(Countdown(), param=2, target=5.0)
	assert result.iterations == 0
	assert result.termination_reason == Reason.TARGET_COST_REACHED
	assert result.best_param == 2


def test_policy_reason_has_priority():
	result = _run(Countdown(converge_at=1), param=1, max_iters=1, target=0.0)
	assert result.termination_reason == Reason.SOLVER_CONVERGED


def test_max_iters_has_priority_over_target():
	result = _run(Countdown(), param=1, max_iters=1, target=0.0)
	assert result.termination_reason == Reason.MAX_ITERS_REACHED


def test_missing_param_raises():
	with pytest.raises(NotInitializedError):
		Executor(CostOnly(), Countdown()).run()


def test_executor_is_single_use():
	executor = Executor(CostOnly(), Countdown()).configure(lambda s: s.param(5).max_iters(1))
	executor.run()
	with pytest.raises(NotInitializedError):
		executor.run()
	with pytest.raises(NotInitializedError):
		executor.configure(lambda s: s)


def test_resume_continues_counter_without_reinit():
	solver = Countdown()
	first = _run(solver, param=20, max_iters=5)
	assert solver.init_calls == 1

	state = first.state.snapshot().max_iters(12)
	second = Executor(CostOnly(), solver, state=state).run()
	assert solver.init_calls == 1
	assert second.iterations == 12
	assert second.best_cost == 8.0
	assert second.termination_reason == Reason.MAX_ITERS_REACHED
	# The first result is untouched by the resumed run
	assert first.iterations == 5


def test_interrupt_from_observer():
	seen = []

	def observer(state):
		seen.append(state.get_iter())
		if state.get_iter() == 3:
			executor.interrupt()

	executor = Executor(CostOnly(), Countdown(), observer=observer)
	executor.configure(lambda s: s.param(100))
	result = executor.run()
	assert seen == [1, 2, 3]
	assert result.iterations == 3
	assert result.termination_reason == Reason.KEYBOARD_INTERRUPT
	assert executor.interrupted


def test_problem_failure_aborts_run():
	with pytest.raises(FailGenCandidateStateError) as info:
		_run(Countdown(), problem=FailsBelow(), param=6)
	assert isinstance(info.value.__cause__, RuntimeError)


def test_timer_records_elapsed_time():
	result = _run(Countdown(), max_iters=3)
	assert result.time is not None and result.time > 0.0

	untimed = (
		Executor(CostOnly(), Countdown(), timer=False)
		.configure(lambda s: s.param(5).max_iters(3))
		.run()
	)
	assert untimed.time == 0.0


def test_configure_from_run_config():
	executor = Executor(CostOnly(), Countdown())
	executor.configure(lambda s: s.param(10))
	result = executor.configure_from(RunConfig(max_iters=50, target_cost=4.0, timer=False)).run()
	assert result.termination_reason == Reason.TARGET_COST_REACHED
	assert result.best_cost == 4.0
	assert result.time == 0.0


def test_messages_go_to_logger_callable():
	messages = []
	(
		Executor(CostOnly(), Countdown(), logger=messages.append)
		.configure(lambda s: s.param(3).max_iters(2))
		.run()
	)
	assert any("Start" in m for m in messages)
	assert any("Maximum number of iterations reached" in m for m in messages)


def test_signal_handlers_restored():
	before = signal.getsignal(signal.SIGINT)
	(
		Executor(CostOnly(), Countdown(), handle_signals=True)
		.configure(lambda s: s.param(3).max_iters(2))
		.run()
	)
	assert signal.getsignal(signal.SIGINT) is before


def test_tabu_requires_neighborhood():
	executor = Executor(CostOnly(), TabuSearch(seed=0)).configure(lambda s: s.param(1))
	with pytest.raises(TypeError):
		executor.run()


def test_existing_state_is_used():
	state = IterState().param(7).max_iters(2)
	result = Executor(CostOnly(), Countdown(), state=state).run()
	assert result.state is state
	assert result.best_param == 5
