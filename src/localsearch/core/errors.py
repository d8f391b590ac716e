"""
Error kinds raised by the local search engine.

Problem failures are fatal: any error raised while a policy initializes or
advances the search aborts the run. Search-quality outcomes (an empty batch,
every candidate tabu) are not errors and never raise.
"""

from typing import Optional


class LocalSearchError(Exception):
	"""Base class for every error raised by the engine."""

	default_message = "Local search error"

	def __init__(self, message: Optional[str] = None):
		super().__init__(message or self.default_message)


class NotInitializedError(LocalSearchError):
	"""State slot already consumed by a run, or never configured."""

	default_message = "Fail to initialize state parameters"


class FailGenRandomStateError(LocalSearchError):
	"""The problem failed to produce a batch of neighbors."""

	default_message = "Fail to generate a random state"


class FailGenCandidateStateError(LocalSearchError):
	"""The problem failed to evaluate or apply a candidate move."""

	default_message = "Fail to generate a candidate state"


class BugError(LocalSearchError):
	"""Internal invariant violated. Should never be raised."""

	default_message = "Bug"
