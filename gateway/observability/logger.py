# gateway/observability/logger.py

# structured JSON logger
import logging
import sys

from opentelemetry import trace
from pythonjsonlogger import jsonlogger

from gateway.utils.logger import use_logs_path


class TraceIdFilter(logging.Filter):
    """Inject trace_id into the record when a span is active."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            ctx = trace.get_current_span().get_span_context()
            if ctx and ctx.trace_id:
                record.trace_id = f"{ctx.trace_id:032x}"
        return True


def _build_formatter() -> logging.Formatter:
    return jsonlogger.JsonFormatter(
        fmt=(
            "%(asctime)s %(levelname)s %(name)s %(message)s %(pathname)s %(lineno)d %(trace_id)s"
        ),
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )


def configure_logging(settings) -> None:
    """Configure root logging and align existing loggers to JSON formatting.

    - Moves the access/error log files under LOGS_PATH and switches them to JSON.
    - Adds a JSON console handler (stdout), once.
    - Injects trace_id when tracing is enabled.
    """
    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL)

    formatter = _build_formatter()
    trace_filter = TraceIdFilter()

    use_logs_path(settings.LOGS_PATH)

    # JSON format on the access/error file handlers
    for logger_name in ("access", "error"):
        lg = logging.getLogger(logger_name)
        lg.setLevel(logging.INFO if logger_name == "access" else logging.ERROR)
        lg.propagate = False  # keep file routing stable
        for h in lg.handlers:
            h.setFormatter(formatter)
            if not any(isinstance(f, TraceIdFilter) for f in h.filters):
                h.addFilter(trace_filter)

    # JSON console handler on root (single instance)
    have_console = any(getattr(h, "name", None) == "json-console" for h in root.handlers)
    if not have_console:
        console = logging.StreamHandler(stream=sys.stdout)
        console.set_name("json-console")
        console.setLevel(settings.LOG_LEVEL)
        console.setFormatter(formatter)
        console.addFilter(trace_filter)
        root.addHandler(console)

    logging.getLogger("startup").info("logging configured", extra={})
