"""localsearch - stochastic local search engine (tabu, variable neighborhood, guided)."""

from localsearch.core import (
	BugError,
	FailGenCandidateStateError,
	FailGenRandomStateError,
	IterState,
	LocalSearchError,
	NotInitializedError,
	Reason,
	Status,
)
from localsearch.problem import (
	AugmentedNeighborhood,
	CostFunction,
	DeltaNeighborhood,
	Neighborhood,
	Penalty,
	Problem,
)
from localsearch.strategies import (
	GuidedLocalSearch,
	GuidedLocalSearchConfig,
	SearchMethod,
	Solver,
	SolverFactory,
	TabuSearch,
	TabuSearchConfig,
	VariableNeighborhood,
	VariableNeighborhoodConfig,
)
from localsearch.config import RunConfig, SearchConfig
from localsearch.executor import Executor
from localsearch.result import RunResult
from localsearch.logger import SearchLogger

__version__ = "0.1.0"

__all__ = [
	# Core
	'IterState', 'Reason', 'Status',
	'LocalSearchError', 'NotInitializedError', 'FailGenRandomStateError',
	'FailGenCandidateStateError', 'BugError',
	# Problem
	'CostFunction', 'Neighborhood', 'DeltaNeighborhood', 'AugmentedNeighborhood',
	'Penalty', 'Problem',
	# Policies
	'Solver', 'TabuSearch', 'TabuSearchConfig',
	'VariableNeighborhood', 'VariableNeighborhoodConfig',
	'GuidedLocalSearch', 'GuidedLocalSearchConfig',
	'SearchMethod', 'SolverFactory',
	# Run
	'RunConfig', 'SearchConfig', 'Executor', 'RunResult',
	# Logging
	'SearchLogger',
]
