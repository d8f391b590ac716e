"""
Tests for SearchLogger.
"""

import logging

from localsearch import SearchLogger, TabuSearch
from localsearch.logger import TRACE


def test_trace_level_registered():
	assert logging.getLevelName(TRACE) == "TRACE"


def test_search_logger_forwards_to_callable():
	messages = []
	log = SearchLogger("test_forward", level=logging.DEBUG, file_logger=messages.append)
	log.debug("step")
	log.trace("hidden")
	log("summary")
	assert messages == ["step", "summary"]


def test_search_logger_set_level():
	messages = []
	log = SearchLogger("test_level", file_logger=messages.append)
	log.trace("hidden")
	log.set_level(TRACE)
	assert log.is_enabled(TRACE)
	log.trace("shown")
	assert messages == ["shown"]


def test_level_is_per_instance():
	verbose_messages, quiet_messages = [], []
	verbose = SearchLogger("test_shared", level=logging.DEBUG, file_logger=verbose_messages.append)
	quiet = SearchLogger("test_shared", level=logging.WARNING, file_logger=quiet_messages.append)

	verbose.debug("detail")
	quiet.debug("detail")
	quiet.info("summary")
	assert verbose_messages == ["detail"]
	assert quiet_messages == []
	assert verbose.level == logging.DEBUG


def test_second_policy_keeps_first_level():
	first_messages = []
	first = TabuSearch(seed=0, logger=first_messages.append, log_level=logging.DEBUG)
	TabuSearch(seed=1, log_level=logging.ERROR)
	first._log.debug("[TabuSearch] still verbose")
	assert first_messages == ["[TabuSearch] still verbose"]


def test_stdlib_output_when_no_sink(caplog):
	log = SearchLogger("test_stdlib", level=logging.DEBUG)
	with caplog.at_level(logging.DEBUG, logger="localsearch.test_stdlib"):
		log.debug("via stdlib")
		log.trace("too fine")
	assert [r.getMessage() for r in caplog.records] == ["via stdlib"]
