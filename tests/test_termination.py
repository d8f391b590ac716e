"""
Tests for the termination model.
"""

import pytest

from localsearch import Reason, Status


@pytest.mark.parametrize("reason,text", [
	(Reason.MAX_ITERS_REACHED, "Maximum number of iterations reached"),
	(Reason.MAX_TIME_REACHED, "Maximum time reached"),
	(Reason.MAX_STALL_BEST_REACHED, "Maximum stall best reached"),
	(Reason.TARGET_COST_REACHED, "Target cost value reached"),
	(Reason.KEYBOARD_INTERRUPT, "Keyboard interrupt"),
	(Reason.SOLVER_CONVERGED, "Solver converged"),
])
def test_reason_text(reason, text):
	assert reason.describe() == text
	assert str(Status.stopped(reason)) == text


def test_solver_exit_uses_message():
	assert str(Status.stopped(Reason.SOLVER_EXIT, "population collapsed")) == "population collapsed"
	assert str(Status.stopped(Reason.SOLVER_EXIT)) == "Undefined"


def test_running_status():
	status = Status.running()
	assert not status.terminated
	assert status.reason is None
	assert str(status) == "Running"


def test_stopped_status_is_terminated():
	status = Status.stopped(Reason.MAX_ITERS_REACHED)
	assert status.terminated
	assert status == Status.stopped(Reason.MAX_ITERS_REACHED)
