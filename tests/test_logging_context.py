from __future__ import annotations


def test_run_id_is_added_to_log_events_while_bound():
    from mailinglist_dynamodb.observability.context import bind_run_id, get_run_id
    from mailinglist_dynamodb.observability.logging import _add_run_id

    assert get_run_id() is None
    assert _add_run_id(None, "info", {"event": "x"}) == {"event": "x"}

    with bind_run_id("run-123") as rid:
        assert rid == "run-123"
        assert _add_run_id(None, "info", {"event": "x"})["run_id"] == "run-123"

    assert get_run_id() is None


def test_bind_run_id_generates_one_when_missing():
    from mailinglist_dynamodb.observability.context import bind_run_id

    with bind_run_id() as rid:
        assert rid


def test_stdlib_and_structlog_records_share_the_run_id_processor():
    from mailinglist_dynamodb.observability import logging as obs_logging

    assert obs_logging._SHARED_PROCESSORS[0] is obs_logging._add_run_id
