"""Tests for the db_operation decorator."""
import pytest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from blog.core.exceptions import DatabaseError, ValidationError
from blog.core.logging_manager import BlogLogger
from blog.database.decorators import db_operation


class FakeManager:
    """Minimal object exposing the ``logger`` attribute the decorator reads."""

    def __init__(self, logger=None):
        self.logger = logger

    @db_operation("add")
    def add(self, a, b):
        return a + b

    @db_operation("list_pair")
    def pair(self):
        return ["a", "b"]

    @db_operation("save", write=True)
    def save(self):
        return "saved"

    @db_operation("fail")
    def fail(self):
        raise ValueError("boom")

    @db_operation("reject")
    def reject(self):
        raise ValidationError("bad month")

    @db_operation("integrity")
    def integrity(self):
        raise IntegrityError("statement", {}, Exception("duplicate"))

    @db_operation("broken")
    def broken(self):
        raise SQLAlchemyError("connection failed")


class TestTiming:
    """Successful calls are reported to the logger."""

    def test_read_logged_as_query(self):
        mock_logger = MagicMock(spec=BlogLogger)

        assert FakeManager(mock_logger).add(1, 2) == 3

        mock_logger.log_query.assert_called_once()
        operation, seconds, rows = mock_logger.log_query.call_args[0]
        assert operation == "add"
        assert seconds >= 0
        assert rows is None
        mock_logger.log_operation.assert_not_called()

    def test_list_result_reports_rows(self):
        mock_logger = MagicMock(spec=BlogLogger)

        FakeManager(mock_logger).pair()

        assert mock_logger.log_query.call_args[0][2] == 2

    def test_write_logged_as_operation(self):
        mock_logger = MagicMock(spec=BlogLogger)

        assert FakeManager(mock_logger).save() == "saved"

        call_args = mock_logger.log_operation.call_args
        assert call_args[0][0] == "save_completed"
        assert "duration_seconds" in call_args[0][1]
        mock_logger.log_query.assert_not_called()

    def test_none_logger(self):
        """Works without a logger."""
        assert FakeManager().add(2, 2) == 4


class TestErrors:
    """Failures propagate; only unexpected ones are logged."""

    def test_unexpected_error_logged_and_reraised(self):
        mock_logger = MagicMock(spec=BlogLogger)

        with pytest.raises(ValueError, match="boom"):
            FakeManager(mock_logger).fail()

        mock_logger.log_error.assert_called_once()
        assert mock_logger.log_error.call_args[0][1]["operation"] == "fail"
        mock_logger.log_query.assert_not_called()

    def test_engine_error_passes_through_unlogged(self):
        mock_logger = MagicMock(spec=BlogLogger)

        with pytest.raises(ValidationError, match="bad month"):
            FakeManager(mock_logger).reject()

        mock_logger.log_error.assert_not_called()

    def test_integrity_error_raises_database_error(self):
        with pytest.raises(DatabaseError, match="Data integrity violation"):
            FakeManager().integrity()

    def test_sqlalchemy_error_raises_database_error(self):
        mock_logger = MagicMock(spec=BlogLogger)

        with pytest.raises(DatabaseError, match="Database operation failed") as exc_info:
            FakeManager(mock_logger).broken()

        assert isinstance(exc_info.value.__cause__, SQLAlchemyError)
        logged = mock_logger.log_error.call_args[0][0]
        assert isinstance(logged, DatabaseError)
