"""
Telemetry for flag evaluation.

- Prometheus: HTTP metrics at /metrics plus evaluation and cache counters
- OpenTelemetry: request tracing exported over OTLP
"""
from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator

from toggles.config import Settings, get_settings


# Outcome label values
OUTCOME_ACTIVE = "active"
OUTCOME_INACTIVE = "inactive"
OUTCOME_NOT_FOUND = "not_found"
OUTCOME_EXPIRED_OVERRIDE = "expired_override"

FLAG_EVALUATIONS = Counter(
    "toggles_flag_evaluations_total",
    "Flag evaluations by outcome",
    ["outcome"],
)

CACHE_LOOKUPS = Counter(
    "toggles_evaluation_cache_lookups_total",
    "Evaluation cache lookups",
    ["result"],  # hit | miss
)


def record_evaluation(outcome: str) -> None:
    FLAG_EVALUATIONS.labels(outcome=outcome).inc()


def record_cache_lookup(hit: bool) -> None:
    CACHE_LOOKUPS.labels(result="hit" if hit else "miss").inc()


def _setup_metrics(app: FastAPI) -> None:
    instrumentator = Instrumentator(
        should_group_status_codes=False,
        should_ignore_untemplated=True,
        should_respect_env_var=True,
        excluded_handlers=["/metrics", "/health", "/health/ready"],
        env_var_name="ENABLE_METRICS",
    )
    instrumentator.instrument(app).expose(app, include_in_schema=False)


def _setup_tracing(app: FastAPI, settings: Settings) -> None:
    resource = Resource.create(attributes={
        "service.name": settings.APP_NAME,
        "service.version": settings.APP_VERSION,
        "deployment.environment": "development" if settings.DEBUG else "production",
    })

    provider = TracerProvider(resource=resource)
    # OTLP exporter, defaults to localhost:4317
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter()))

    trace.set_tracer_provider(provider)
    FastAPIInstrumentor.instrument_app(
        app,
        tracer_provider=provider,
        excluded_urls="health,metrics",
    )


def setup_telemetry(app: FastAPI) -> None:
    """Enable Prometheus metrics and OTLP tracing according to settings."""
    settings = get_settings()

    if settings.ENABLE_PROMETHEUS:
        _setup_metrics(app)

    if settings.ENABLE_OTEL:
        _setup_tracing(app, settings)
