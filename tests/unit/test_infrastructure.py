# tests/unit/test_infrastructure.py
# Unit tests for infrastructure components

import pytest
from pydantic import ValidationError as SettingsValidationError


class TestErrorHandler:
    """Test error handler classes."""

    def test_app_error_has_correct_properties(self):
        from gateway.exceptions import AppError

        error = AppError(
            message="Test error",
            error_code="TEST_ERROR",
            status_code=400,
            details={"field": "value"}
        )

        assert error.message == "Test error"
        assert error.error_code == "TEST_ERROR"
        assert error.status_code == 400
        assert error.details == {"field": "value"}

    def test_database_error_defaults(self):
        from gateway.exceptions import DatabaseError

        error = DatabaseError()

        assert error.error_code == "DATABASE_ERROR"
        assert error.status_code == 503
        assert error.details == {}

    def test_unauthorized_error_defaults(self):
        from gateway.exceptions import UnauthorizedError

        error = UnauthorizedError(details={"header": "x-auth-username"})

        assert error.error_code == "UNAUTHORIZED"
        assert error.status_code == 401
        assert error.details["header"] == "x-auth-username"

    def test_error_response_envelope(self):
        import json
        from gateway.middleware.error_handler import create_error_response

        response = create_error_response(
            error_code="NOT_FOUND",
            message="missing",
            status_code=404,
            details={"id": "abc"},
            request_id="req-1",
        )
        body = json.loads(response.body)

        assert response.status_code == 404
        assert body == {
            "error": {
                "code": "NOT_FOUND",
                "message": "missing",
                "details": {"id": "abc"},
                "request_id": "req-1",
            }
        }


class TestSettings:
    """Test configuration parsing."""

    def test_log_level_is_upper_cased(self):
        from gateway.config import Settings

        assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_invalid_log_level_rejected(self):
        from gateway.config import Settings

        with pytest.raises(SettingsValidationError):
            Settings(LOG_LEVEL="chatty")

    def test_settings_read_from_environment(self, monkeypatch):
        from gateway.config import Settings

        monkeypatch.setenv("VERSION", "9.9.9")
        monkeypatch.setenv("AUTH_USERNAME_HEADER", "x-user")

        s = Settings()
        assert s.VERSION == "9.9.9"
        assert s.AUTH_USERNAME_HEADER == "x-user"


class TestDatabaseUrl:
    """Test driver normalization for engine URLs."""

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("postgresql://u:p@db:5432/aerie", "postgresql+asyncpg://u:p@db:5432/aerie"),
            ("postgres://u:p@db:5432/aerie", "postgresql+asyncpg://u:p@db:5432/aerie"),
            ("postgresql+asyncpg://u:p@db/aerie", "postgresql+asyncpg://u:p@db/aerie"),
            ("postgresql+psycopg2://u:p@db/aerie", "postgresql+asyncpg://u:p@db/aerie"),
            ("sqlite:///./views.db", "sqlite+aiosqlite:///./views.db"),
            ("sqlite+aiosqlite:///./views.db", "sqlite+aiosqlite:///./views.db"),
        ],
    )
    def test_to_async_url(self, url, expected):
        from gateway.db.base import _to_async_url

        assert _to_async_url(url) == expected


class TestLogging:
    """Test logging configuration."""

    @staticmethod
    def _flush(*names):
        import logging

        for name in names:
            for h in logging.getLogger(name).handlers:
                h.flush()

    def test_log_files_follow_configured_path(self, tmp_path):
        from gateway.config import Settings
        from gateway.observability.logger import configure_logging
        from gateway.utils.logger import log_exception, log_info

        logs = tmp_path / "elsewhere"
        configure_logging(Settings(LOGS_PATH=str(logs)))

        log_info("view created id=abc")
        try:
            raise RuntimeError("store down")
        except RuntimeError as e:
            log_exception(e, "ViewRepository.get_view")
        self._flush("access", "error")

        assert "view created id=abc" in (logs / "access.log").read_text(encoding="utf-8")
        assert "store down" in (logs / "error.log").read_text(encoding="utf-8")

    def test_configure_logging_is_idempotent(self, tmp_path):
        import logging
        from gateway.config import Settings
        from gateway.observability.logger import TraceIdFilter, configure_logging

        s = Settings(LOGS_PATH=str(tmp_path / "logs"))
        configure_logging(s)
        configure_logging(s)

        consoles = [h for h in logging.getLogger().handlers if h.get_name() == "json-console"]
        assert len(consoles) == 1
        for name in ("access", "error"):
            handlers = logging.getLogger(name).handlers
            file_handlers = [h for h in handlers if isinstance(h, logging.FileHandler)]
            assert len(file_handlers) == 1
            assert file_handlers[0].baseFilename.startswith(str(tmp_path))
            trace_filters = [f for f in file_handlers[0].filters if isinstance(f, TraceIdFilter)]
            assert len(trace_filters) == 1

    def test_trace_id_filter_adds_active_trace_id(self):
        import logging
        from opentelemetry import trace
        from opentelemetry.trace import NonRecordingSpan, SpanContext
        from gateway.observability.logger import TraceIdFilter

        record = logging.LogRecord("access", logging.INFO, __file__, 1, "msg", None, None)
        span = NonRecordingSpan(SpanContext(trace_id=0xABC, span_id=0x1, is_remote=False))
        with trace.use_span(span):
            assert TraceIdFilter().filter(record) is True

        assert record.trace_id == f"{0xABC:032x}"
