import logging
import sys
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar
from functools import wraps
from typing import Any, ParamSpec, TypeVar, cast

from prometheus_client import REGISTRY, Counter, Histogram

# --- Correlation IDs (one per user action) ---
correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="system")

DURATION_METRIC = "iquiz_operation_duration_seconds"
LOADS_METRIC = "iquiz_document_loads"


def _get_or_create(factory: Callable[[], Any], name: str) -> Any:
    """
    Streamlit re-imports modules on every rerun; registering the same
    collector twice raises ValueError, so reuse the registered one.
    """
    try:
        return factory()
    except ValueError:
        return REGISTRY._names_to_collectors[name]


OPERATION_DURATION = cast(
    Histogram,
    _get_or_create(
        lambda: Histogram(
            DURATION_METRIC, "Time spent in an operation", ["component", "method"]
        ),
        DURATION_METRIC,
    ),
)

DOCUMENT_LOADS = cast(
    Counter,
    _get_or_create(
        lambda: Counter(
            LOADS_METRIC, "Quiz document load attempts", ["origin", "outcome"]
        ),
        # Counters register under the name without the _total suffix
        LOADS_METRIC,
    ),
)

P = ParamSpec("P")
R = TypeVar("R")


def measure_time(metric_name: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator for timing methods + logging.
    Expects to wrap instance methods; a `telemetry` attribute on `self`
    receives the log lines.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start = time.perf_counter()
            self_obj: Any = args[0] if args else None
            component = self_obj.__class__.__name__ if self_obj else "Unknown"
            telemetry = getattr(self_obj, "telemetry", None)

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = time.perf_counter() - start
                OPERATION_DURATION.labels(
                    component=component, method=func.__name__
                ).observe(duration)
                if telemetry:
                    telemetry.log_error(
                        f"💥 Failed: {metric_name}",
                        e,
                        duration_ms=round(duration * 1000, 2),
                    )
                raise

            duration = time.perf_counter() - start
            OPERATION_DURATION.labels(component=component, method=func.__name__).observe(
                duration
            )
            if telemetry:
                telemetry.log_info(
                    f"⏱️ {metric_name}", duration_ms=round(duration * 1000, 2)
                )
            return result

        return wrapper

    return decorator


class Telemetry:
    """
    Facade for Logs, Metrics, and Tracing.
    """

    def __init__(self, component_name: str) -> None:
        self.component = component_name
        self.logger: logging.Logger
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Safe to call multiple times."""
        self.logger = logging.getLogger(f"iquiz.{self.component}")

        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            )
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    # Streamlit pickles session state; loggers hold locks and cannot travel.
    def __getstate__(self) -> dict[str, Any]:
        state = self.__dict__.copy()
        state.pop("logger", None)
        return state

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.__dict__.update(state)
        self._setup_logger()

    @staticmethod
    def start_trace() -> str:
        c_id = str(uuid.uuid4())[:8]
        correlation_id_ctx.set(c_id)
        return c_id

    @staticmethod
    def get_trace_id() -> str:
        return correlation_id_ctx.get()

    def log_info(self, event: str, **kwargs: Any) -> None:
        self.logger.info(f"[{self.get_trace_id()}] {event} | {kwargs}")

    def log_warning(self, event: str, **kwargs: Any) -> None:
        self.logger.warning(f"[{self.get_trace_id()}] ⚠️ {event} | {kwargs}")

    def log_error(self, event: str, error: Exception, **kwargs: Any) -> None:
        self.logger.error(
            f"[{self.get_trace_id()}] ❌ {event} | Error: {error} | {kwargs}",
            exc_info=True,
        )

    def record_load(self, origin: str, outcome: str) -> None:
        DOCUMENT_LOADS.labels(origin=origin, outcome=outcome).inc()
