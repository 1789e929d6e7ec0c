"""Tests for structured logging."""
import logging
import sys

from recipe_ranking.logging_utils import RUN_ID, StructuredFormatter, get_logger


def make_record(msg="No scoring preferences for user %s", args=("u1",), **extra):
    record = logging.LogRecord(
        name="recipe_ranking.recommendation.pipeline",
        level=logging.WARNING,
        pathname="/app/recipe_ranking/recommendation/pipeline.py",
        lineno=42,
        msg=msg,
        args=args,
        exc_info=None,
        func="recommend",
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    """Tests for StructuredFormatter."""

    def test_pipe_delimited_fields(self):
        line = StructuredFormatter().format(make_record(
            invoking_func="recommend",
            next_step="Return None",
            resolution="User must complete preference setup",
        ))
        parts = line.split("|")
        assert len(parts) == 13
        assert parts[0] == RUN_ID
        assert parts[3] == "WARNING"
        assert parts[4] == "pipeline.py:42"
        assert parts[5] == "pipeline.recommend"
        assert parts[6] == StructuredFormatter.MODULE_PURPOSES["pipeline"]
        assert parts[7] == "recommend"
        assert parts[9] == "No scoring preferences for user u1"
        assert parts[10] == "Return None"
        assert parts[11] == "User must complete preference setup"
        assert parts[12] == "<END>"

    def test_missing_extras_are_blank(self):
        parts = StructuredFormatter().format(make_record()).split("|")
        assert parts[7] == ""
        assert parts[10] == ""

    def test_exception_appended(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = make_record(msg="failed", args=())
            record.exc_info = sys.exc_info()
        line = StructuredFormatter().format(record)
        assert "failed EXC=ValueError('boom')" in line


class TestGetLogger:
    def test_named_logger(self):
        logger = get_logger("recipe_ranking.settings")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "recipe_ranking.settings"
