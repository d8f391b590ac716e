"""
Local search policies.

Usage:
	from localsearch.strategies import SolverFactory, SearchMethod, TabuSearchConfig

	solver = SolverFactory.create(
		SearchMethod.TABU_SEARCH,
		config=TabuSearchConfig(neighbors_per_iter=10, tabu_size=20),
		seed=42,
	)
"""

from localsearch.strategies.base import (
	EPSILON,
	SearchPolicyConfig,
	Solver,
	StallCounter,
	acceptance_probability,
	annealing_accept,
	argmin,
	evaluate_candidates,
	is_improving,
	params_equal,
)
from localsearch.strategies.tabu_search import TabuSearch, TabuSearchConfig
from localsearch.strategies.variable_neighborhood import (
	VariableNeighborhood,
	VariableNeighborhoodConfig,
)
from localsearch.strategies.guided_local_search import (
	GuidedLocalSearch,
	GuidedLocalSearchConfig,
)
from localsearch.strategies.factory import CONFIG_TYPES, SearchMethod, SolverFactory

__all__ = [
	# Base
	'EPSILON',
	'SearchPolicyConfig',
	'Solver',
	'StallCounter',
	'acceptance_probability',
	'annealing_accept',
	'argmin',
	'evaluate_candidates',
	'is_improving',
	'params_equal',
	# Tabu Search
	'TabuSearch',
	'TabuSearchConfig',
	# Variable Neighborhood
	'VariableNeighborhood',
	'VariableNeighborhoodConfig',
	# Guided Local Search
	'GuidedLocalSearch',
	'GuidedLocalSearchConfig',
	# Factory
	'CONFIG_TYPES',
	'SearchMethod',
	'SolverFactory',
]
