"""
Process logging for splitquery.

Records go to the console plus either OpenTelemetry OTLP export or, when
``OTEL_SDK_DISABLED`` is set, a rotating file under ``Settings.LOG_DIR``.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

from opentelemetry import _logs, trace
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import (
    OTLPLogExporter as GrpcOTLPLogExporter,
)
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
    OTLPSpanExporter as GrpcOTLPSpanExporter,
)
from opentelemetry.exporter.otlp.proto.http._log_exporter import (
    OTLPLogExporter as HttpOTLPLogExporter,
)
from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
    OTLPSpanExporter as HttpOTLPSpanExporter,
)
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from splitquery.config import Settings, settings as default_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_HTTP_PROTOCOLS = {"http", "http/protobuf"}

_logging_initialized = False


def otel_disabled() -> bool:
    return os.getenv("OTEL_SDK_DISABLED", "").strip().lower() in {"1", "true", "yes", "on"}


def otlp_protocol(signal: str) -> str | None:
    """Protocol for the ``logs`` or ``traces`` exporter, ``None`` when it is switched off."""
    signal = signal.upper()
    if os.getenv(f"OTEL_{signal}_EXPORTER", "otlp").strip().lower() in {"none", "disabled"}:
        return None
    protocol = os.getenv(f"OTEL_EXPORTER_OTLP_{signal}_PROTOCOL") or os.getenv(
        "OTEL_EXPORTER_OTLP_PROTOCOL", "grpc"
    )
    return protocol.strip().lower()


def _file_handler(app_settings: Settings) -> logging.Handler:
    os.makedirs(app_settings.LOG_DIR, exist_ok=True)
    return RotatingFileHandler(
        os.path.join(app_settings.LOG_DIR, app_settings.LOG_FILE),
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )


def _otlp_handler(app_settings: Settings, level: str) -> logging.Handler | None:
    resource = Resource.create({"service.name": app_settings.SERVICE_NAME})

    tracer_provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(tracer_provider)
    traces = otlp_protocol("traces")
    if traces is not None:
        span_exporter = HttpOTLPSpanExporter() if traces in _HTTP_PROTOCOLS else GrpcOTLPSpanExporter()
        tracer_provider.add_span_processor(BatchSpanProcessor(span_exporter))

    logger_provider = LoggerProvider(resource=resource)
    _logs.set_logger_provider(logger_provider)
    LoggingInstrumentor().instrument(set_logging_format=False)

    logs = otlp_protocol("logs")
    if logs is None:
        return None
    log_exporter = HttpOTLPLogExporter() if logs in _HTTP_PROTOCOLS else GrpcOTLPLogExporter()
    logger_provider.add_log_record_processor(BatchLogRecordProcessor(log_exporter))
    return LoggingHandler(level=level, logger_provider=logger_provider)


def setup_logging(app_settings: Settings | None = None) -> logging.Logger:
    """
    Configure the root logger from ``app_settings`` (``LOG_LEVEL``, ``SERVICE_NAME``,
    ``LOG_DIR``, ``LOG_FILE``). Repeated calls only update the level.
    """
    global _logging_initialized

    app_settings = app_settings or default_settings
    level = app_settings.LOG_LEVEL.upper()
    root = logging.getLogger("")
    root.setLevel(level)
    if _logging_initialized:
        return root
    _logging_initialized = True

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if otel_disabled():
        handlers.append(_file_handler(app_settings))
    else:
        otlp = _otlp_handler(app_settings, level)
        if otlp is not None:
            handlers.append(otlp)

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.debug("Logging initialized level=%s otel=%s", level, "disabled" if otel_disabled() else "enabled")
    return root
