import os
import logging
import streamlit as st

# --- OTel & Observability Imports ---
from opentelemetry import trace
from opentelemetry._logs import set_logger_provider
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter

from prometheus_client import start_http_server

# --- Application Imports ---
from src.config import AppConfig
from src.fsm import QuizPhase
from src.quiz.adapters.db_manager import DatabaseManager
from src.quiz.adapters.file_cache import FileDocumentCache
from src.quiz.adapters.http_provider import HttpDataProvider
from src.quiz.adapters.seeder import DocumentSeeder
from src.quiz.adapters.sqlite_store import SQLitePreferenceStore
from src.quiz.application.service import QuizService
from src.quiz.presentation.state_provider import StreamlitStateProvider
from src.quiz.presentation.viewmodel import QuizViewModel, Screen
from src.quiz.presentation.views import components, question_view, summary_view, topic_list_view


# --- 1. Observability ---
def configure_observability():
    """
    Sends traces and logs over OTLP when the OTEL env vars are present,
    and exposes Prometheus metrics either way.
    """
    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    headers = os.getenv("OTEL_EXPORTER_OTLP_HEADERS")

    if endpoint and headers:
        resource = Resource.create({"service.name": AppConfig.SERVICE_NAME})

        trace_provider = TracerProvider(resource=resource)
        trace_provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, headers=headers))
        )
        trace.set_tracer_provider(trace_provider)

        logger_provider = LoggerProvider(resource=resource)
        logger_provider.add_log_record_processor(
            BatchLogRecordProcessor(OTLPLogExporter(endpoint=endpoint, headers=headers))
        )
        set_logger_provider(logger_provider)
        logging.getLogger().addHandler(
            LoggingHandler(level=logging.INFO, logger_provider=logger_provider)
        )
    else:
        logging.getLogger(__name__).warning(
            "OTEL env vars not set. Telemetry stays local."
        )

    try:
        start_http_server(AppConfig.METRICS_PORT)
    except OSError:
        # Port already bound by a previous Streamlit rerun
        logging.getLogger(__name__).info(
            "Metrics port %s already in use. Skipping.", AppConfig.METRICS_PORT
        )


if "observability_configured" not in st.session_state:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(message)s')
    configure_observability()
    st.session_state.observability_configured = True


# --- 2. Dependency Injection (Composition Root) ---
@st.cache_resource
def get_service() -> QuizService:
    cache = FileDocumentCache(AppConfig.CACHE_PATH)
    DocumentSeeder(cache).seed_if_empty(AppConfig.SEED_PATH)

    preferences = SQLitePreferenceStore(DatabaseManager(AppConfig.DB_PATH))
    return QuizService(HttpDataProvider(), preferences, cache)


def main():
    st.set_page_config(page_title=AppConfig.APP_TITLE, page_icon="❓", layout="centered")
    components.apply_styles()

    vm = QuizViewModel(get_service(), StreamlitStateProvider())

    # First visit: load whatever the stored URL points at
    if not vm.has_loaded:
        vm.refresh()

    # --- Settings ---
    url, check_now = components.render_settings(vm.source_url)
    if check_now:
        vm.refresh(url)
        st.rerun()

    components.render_messages(vm.load_error, vm.notice)

    # --- Router ---
    if vm.screen == Screen.TOPICS or vm.session is None:
        topic_list_view.render(vm)
    elif vm.phase == QuizPhase.AWAITING_ANSWER:
        question_view.render_active(vm)
    elif vm.phase == QuizPhase.SHOWING_FEEDBACK:
        question_view.render_feedback(vm)
    elif vm.phase == QuizPhase.FINISHED:
        summary_view.render(vm)


if __name__ == "__main__":
    main()
