"""
Factory for creating local search policies.
"""

import random
from enum import IntEnum, auto
from typing import Callable, Optional, Union

from localsearch.strategies.base import Solver
from localsearch.strategies.tabu_search import TabuSearch, TabuSearchConfig
from localsearch.strategies.variable_neighborhood import VariableNeighborhood, VariableNeighborhoodConfig
from localsearch.strategies.guided_local_search import GuidedLocalSearch, GuidedLocalSearchConfig


class SearchMethod(IntEnum):
	"""Available local search policies."""
	TABU_SEARCH = auto()
	VARIABLE_NEIGHBORHOOD = auto()
	GUIDED_LOCAL_SEARCH = auto()

	@classmethod
	def from_name(cls, name: Union[str, 'SearchMethod']) -> 'SearchMethod':
		"""Parse 'TABU_SEARCH', 'tabu_search' or an existing member."""
		if isinstance(name, cls):
			return name
		try:
			return cls[str(name).strip().upper()]
		except KeyError:
			raise ValueError(f"Unknown search method: {name}") from None


ConfigType = Union[TabuSearchConfig, VariableNeighborhoodConfig, GuidedLocalSearchConfig, None]

CONFIG_TYPES = {
	SearchMethod.TABU_SEARCH: TabuSearchConfig,
	SearchMethod.VARIABLE_NEIGHBORHOOD: VariableNeighborhoodConfig,
	SearchMethod.GUIDED_LOCAL_SEARCH: GuidedLocalSearchConfig,
}


class SolverFactory:
	"""
	Factory for creating local search policies.

	Usage:
		# Default Tabu Search
		solver = SolverFactory.create(SearchMethod.TABU_SEARCH, seed=42)

		# With custom config
		config = GuidedLocalSearchConfig(neighbors_per_iter=20, alpha=0.2)
		solver = SolverFactory.create(SearchMethod.GUIDED_LOCAL_SEARCH, config=config)
	"""

	@staticmethod
	def create(
		method: SearchMethod,
		config: ConfigType = None,
		rng: Optional[random.Random] = None,
		seed: Optional[int] = None,
		logger: Optional[Callable[[str], None]] = None,
	) -> Solver:
		"""
		Create a policy.

		A config of the wrong type for the method is ignored and the
		method's default config is used instead.
		"""
		if method == SearchMethod.TABU_SEARCH:
			ts_config = config if isinstance(config, TabuSearchConfig) else None
			return TabuSearch(config=ts_config, rng=rng, seed=seed, logger=logger)

		elif method == SearchMethod.VARIABLE_NEIGHBORHOOD:
			vn_config = config if isinstance(config, VariableNeighborhoodConfig) else None
			return VariableNeighborhood(config=vn_config, rng=rng, seed=seed, logger=logger)

		elif method == SearchMethod.GUIDED_LOCAL_SEARCH:
			gls_config = config if isinstance(config, GuidedLocalSearchConfig) else None
			return GuidedLocalSearch(config=gls_config, rng=rng, seed=seed, logger=logger)

		else:
			raise ValueError(f"Unknown search method: {method}")

	@staticmethod
	def create_default() -> Solver:
		"""Create the default policy (Tabu Search)."""
		return TabuSearch()
