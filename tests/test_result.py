"""
Tests for RunResult rendering and ordering.
"""

import io

from rich.console import Console

from localsearch import IterState, Problem, Reason, RunResult, TabuSearch

from conftest import CostOnly


def _result(best_cost: float, time=1.5) -> RunResult:
	state = IterState().param(3).cost(best_cost)
	state.update()
	state.increment_iter()
	state.terminate_with(Reason.MAX_ITERS_REACHED)
	state.elapsed(time)
	return RunResult(Problem(CostOnly()), TabuSearch(seed=0), state)


def test_str_block():
	expected = (
		"OptimizationResult:\n"
		"    Solver:        TabuSearch\n"
		"    param (best):  3\n"
		"    cost (best):   3.0\n"
		"    iters (best):  0\n"
		"    iters (total): 1\n"
		"    termination:   Maximum number of iterations reached\n"
		"    time:          1.5000s\n"
	)
	assert str(_result(3.0)) == expected


def test_time_line_omitted_without_time():
	assert "time:" not in str(_result(3.0, time=None))


def test_table_has_one_row_per_field():
	table = _result(3.0).to_table()
	assert table.row_count == 7


def test_print_renders_table():
	buffer = io.StringIO()
	_result(2.0).print(Console(file=buffer, width=100))
	output = buffer.getvalue()
	assert "OptimizationResult" in output
	assert "TabuSearch" in output


def test_results_order_by_best_cost():
	results = [_result(5.0), _result(1.0), _result(3.0)]
	assert min(results).best_cost == 1.0
	assert sorted(results)[-1].best_cost == 5.0
	assert _result(2.0) == _result(2.0 + 1e-17)
	assert not _result(2.0) < _result(2.0)


def test_properties():
	result = _result(4.0)
	assert result.solver_name == "TabuSearch"
	assert result.best_param == 3
	assert result.iterations == 1
	assert result.termination_reason == Reason.MAX_ITERS_REACHED
	assert result.time == 1.5
