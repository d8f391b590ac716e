"""
Logging for local search runs.

SearchLogger is the level-aware wrapper used inside policies and the
executor (TRACE for per-candidate detail, DEBUG per iteration, INFO for
summaries). Any Callable[[str], None] can be passed as `logger=` to a policy
or the Executor to receive the enabled messages instead of the standard
library handlers.

Usage:
	messages = []
	solver = TabuSearch(config, seed=7, logger=messages.append, log_level=logging.DEBUG)
"""

import logging
from typing import Callable, Optional

# Custom TRACE level (below DEBUG)
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class SearchLogger:
	"""
	Logger wrapper with TRACE, DEBUG, INFO, WARNING, ERROR levels.

	TRACE: Candidate batches, per-candidate values
	DEBUG: Acceptance decisions, escape steps, per-iteration progress
	INFO: Run start/stop summaries
	ERROR: Fatal problem failures

	The level belongs to this instance: policies sharing a name (and thus the
	`localsearch.<name>` stdlib logger) keep independent levels. The shared
	stdlib logger is only given a level when it has none, so a level set on
	it by the application still filters stdlib output.

	When file_logger is given, every enabled message is forwarded to it
	instead of the standard library handlers.
	"""

	def __init__(
		self,
		name: str,
		level: int = logging.INFO,
		file_logger: Optional[Callable[[str], None]] = None,
	):
		self._logger = logging.getLogger(f"localsearch.{name}")
		# Only add StreamHandler if no file_logger (file_logger handles output)
		if not file_logger and not self._logger.handlers:
			handler = logging.StreamHandler()
			handler.setFormatter(logging.Formatter("%(message)s"))
			self._logger.addHandler(handler)
		if self._logger.level == logging.NOTSET:
			self._logger.setLevel(TRACE)
		self._level = level
		self._name = name
		self._file_logger = file_logger

	@property
	def name(self) -> str:
		return self._name

	@property
	def level(self) -> int:
		return self._level

	def is_enabled(self, level: int) -> bool:
		if level < self._level:
			return False
		# The file sink bypasses the stdlib logger entirely
		return bool(self._file_logger) or self._logger.isEnabledFor(level)

	def _emit(self, level: int, msg: str) -> None:
		if not self.is_enabled(level):
			return
		if self._file_logger:
			self._file_logger(msg)
		else:
			self._logger.log(level, msg)

	def trace(self, msg: str) -> None:
		self._emit(TRACE, msg)

	def debug(self, msg: str) -> None:
		self._emit(logging.DEBUG, msg)

	def info(self, msg: str) -> None:
		self._emit(logging.INFO, msg)

	def warning(self, msg: str) -> None:
		self._emit(logging.WARNING, msg)

	def error(self, msg: str) -> None:
		self._emit(logging.ERROR, msg)

	def __call__(self, msg: str) -> None:
		"""Default: INFO level (print-style logging)."""
		self.info(msg)

	def set_level(self, level: int) -> None:
		"""Change this instance's log level."""
		self._level = level
