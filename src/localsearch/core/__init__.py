"""
Core types of the local search engine: iteration state, termination model
and error kinds.
"""

from localsearch.core.errors import (
	LocalSearchError,
	NotInitializedError,
	FailGenRandomStateError,
	FailGenCandidateStateError,
	BugError,
)
from localsearch.core.termination import Reason, Status
from localsearch.core.state import IterState, clone_param

__all__ = [
	# Errors
	'LocalSearchError',
	'NotInitializedError',
	'FailGenRandomStateError',
	'FailGenCandidateStateError',
	'BugError',
	# Termination
	'Reason',
	'Status',
	# State
	'IterState',
	'clone_param',
]
