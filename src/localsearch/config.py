"""
Run and search configuration.

RunConfig holds the run-level bounds applied to the iteration state.
SearchConfig bundles a method, its policy options and a RunConfig, and
round-trips through YAML:

	method: TABU_SEARCH
	seed: 42
	policy:
	  neighbors_per_iter: 10
	  tabu_size: 20
	  init_temp: 100.0
	run:
	  max_iters: 10000
	  target_cost: 0.0
"""

import math
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

import yaml

from localsearch.core.state import IterState
from localsearch.strategies.base import SearchPolicyConfig, Solver
from localsearch.strategies.factory import CONFIG_TYPES, SearchMethod, SolverFactory


@dataclass
class RunConfig:
	"""
	Run-level bounds.

	max_iters: iteration budget (None = unbounded)
	max_time: wall-clock budget in seconds, recorded in the state; only
		enforced by policies configured with enforce_max_time
	target_cost: stop once best cost <= target_cost
	timer: record elapsed time in the state
	"""
	max_iters: Optional[int] = None
	max_time: Optional[float] = None
	target_cost: float = -math.inf
	timer: bool = True

	def __post_init__(self):
		if self.max_iters is not None and self.max_iters < 0:
			raise ValueError(f"max_iters must be >= 0, got {self.max_iters}")
		if self.max_time is not None and self.max_time <= 0:
			raise ValueError(f"max_time must be > 0, got {self.max_time}")
		self.target_cost = float(self.target_cost)

	def apply(self, state: IterState) -> IterState:
		"""Install these bounds on a state."""
		state.target_cost(self.target_cost).max_time(self.max_time)
		if self.max_iters is not None:
			state.max_iters(self.max_iters)
		return state


@dataclass
class SearchConfig:
	"""Method, policy options and run bounds for one search."""
	method: SearchMethod = SearchMethod.TABU_SEARCH
	seed: Optional[int] = None
	policy: Optional[SearchPolicyConfig] = None
	run: RunConfig = field(default_factory=RunConfig)

	def __post_init__(self):
		self.method = SearchMethod.from_name(self.method)
		config_type = CONFIG_TYPES[self.method]
		if self.policy is None:
			self.policy = config_type()
		elif isinstance(self.policy, dict):
			self.policy = config_type(**self.policy)
		elif not isinstance(self.policy, config_type):
			raise ValueError(
				f"{type(self.policy).__name__} does not configure {self.method.name}"
			)
		if isinstance(self.run, dict):
			self.run = RunConfig(**self.run)

	def build_solver(self, logger: Optional[Callable[[str], None]] = None) -> Solver:
		"""Create the configured policy."""
		return SolverFactory.create(self.method, config=self.policy, seed=self.seed, logger=logger)

	def to_dict(self) -> dict[str, Any]:
		run = asdict(self.run)
		# YAML has no portable infinity literal for safe_load round-trips
		if math.isinf(run["target_cost"]):
			run["target_cost"] = None
		return {
			"method": self.method.name,
			"seed": self.seed,
			"policy": asdict(self.policy),
			"run": run,
		}

	@classmethod
	def from_dict(cls, data: dict[str, Any]) -> 'SearchConfig':
		data = dict(data)
		run = dict(data.get("run") or {})
		if run.get("target_cost") is None:
			run.pop("target_cost", None)
		data["run"] = run
		return cls(**data)

	def to_yaml(self) -> str:
		"""Convert config to YAML string."""
		return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

	def save_yaml(self, filepath: str) -> None:
		"""Save config to YAML file."""
		path = Path(filepath)
		path.parent.mkdir(parents=True, exist_ok=True)
		with open(path, 'w') as f:
			f.write(self.to_yaml())

	@classmethod
	def from_yaml(cls, yaml_str: str) -> 'SearchConfig':
		"""Create config from YAML string."""
		data = yaml.safe_load(yaml_str) or {}
		return cls.from_dict(data)

	@classmethod
	def load_yaml(cls, filepath: str) -> 'SearchConfig':
		"""Load config from YAML file."""
		with open(filepath, 'r') as f:
			return cls.from_yaml(f.read())
