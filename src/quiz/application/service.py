from dataclasses import dataclass
from enum import Enum

from src.config import AppConfig
from src.quiz.domain.errors import DecodeError, FetchError, NetworkUnavailableError
from src.quiz.domain.models import ScoreSummary, Topic
from src.quiz.domain.parser import parse_document
from src.quiz.domain.ports import ICacheStore, IDataProvider, IPreferenceStore
from src.quiz.domain.session import QuizSession
from src.shared.telemetry import Telemetry, measure_time


class DocumentOrigin(str, Enum):
    NETWORK = "network"
    CACHE = "cache"


# --- (Data Transfer Object) ---
@dataclass(frozen=True)
class LoadResult:
    topics: list[Topic]
    origin: DocumentOrigin
    source_url: str
    warning: str | None = None


class QuizService:
    def __init__(
        self,
        provider: IDataProvider,
        preferences: IPreferenceStore,
        cache: ICacheStore,
    ) -> None:
        self.provider = provider
        self.preferences = preferences
        self.cache = cache
        self.telemetry = Telemetry("QuizService")

    @property
    def source_url(self) -> str:
        return self.preferences.get(AppConfig.SOURCE_URL_KEY) or AppConfig.DEFAULT_SOURCE_URL

    @measure_time("load_topics")
    def load_topics(self, source_url: str | None = None) -> LoadResult:
        """
        Network first, cached copy second.

        Raises:
            DecodeError: the downloaded document is invalid. Cache and stored
                URL are left as they were.
            NetworkUnavailableError: the source is unreachable and no usable
                cached copy exists.
            FetchError: the server refused the request or the URL is unusable.
                The cache is not consulted.
        """
        url = (source_url or self.source_url).strip()

        try:
            raw = self.provider.fetch(url)
        except NetworkUnavailableError as e:
            self.telemetry.log_warning("Source unreachable, trying cache", url=url, reason=str(e))
            return self._load_from_cache(e)
        except FetchError:
            self.telemetry.record_load(DocumentOrigin.NETWORK.value, "refused")
            raise

        try:
            topics = parse_document(raw)
        except DecodeError:
            self.telemetry.record_load(DocumentOrigin.NETWORK.value, "invalid")
            raise

        self.cache.save(raw)
        self.preferences.set(AppConfig.SOURCE_URL_KEY, url)
        self.telemetry.record_load(DocumentOrigin.NETWORK.value, "ok")
        self.telemetry.log_info("Topics loaded", url=url, topics=len(topics))
        return LoadResult(topics=topics, origin=DocumentOrigin.NETWORK, source_url=url)

    def _load_from_cache(self, fetch_error: NetworkUnavailableError) -> LoadResult:
        raw = self.cache.load()
        if raw is None:
            self.telemetry.record_load(DocumentOrigin.CACHE.value, "missing")
            raise fetch_error

        try:
            topics = parse_document(raw)
        except DecodeError as e:
            self.telemetry.log_error("Cached document is unreadable", e)
            self.telemetry.record_load(DocumentOrigin.CACHE.value, "invalid")
            raise fetch_error from e

        self.telemetry.record_load(DocumentOrigin.CACHE.value, "ok")
        return LoadResult(
            topics=topics,
            origin=DocumentOrigin.CACHE,
            # The cached copy came from the last URL that worked
            source_url=self.source_url,
            warning=f"Offline: showing saved questions ({fetch_error})",
        )

    def start_session(self, topic: Topic) -> QuizSession:
        self.telemetry.log_info("Session started", topic=topic.title, total=topic.total)
        return QuizSession(topic)

    def finish_session(self, session: QuizSession) -> ScoreSummary:
        summary = session.final_score_summary()
        self.telemetry.log_info(
            "Session finished",
            topic=session.topic.title,
            score=summary.score,
            total=summary.total,
            band=summary.band.value,
        )
        return summary
