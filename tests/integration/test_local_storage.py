import json
import pickle
from pathlib import Path

import httpx
import pytest

from src.quiz.adapters.db_manager import DatabaseManager
from src.quiz.adapters.file_cache import FileDocumentCache
from src.quiz.adapters.http_provider import HttpDataProvider
from src.quiz.adapters.seeder import DocumentSeeder
from src.quiz.adapters.sqlite_store import SQLitePreferenceStore
from src.quiz.application.service import DocumentOrigin, QuizService
from src.quiz.domain.errors import FetchError

SAMPLE_DOCUMENT = Path(__file__).resolve().parents[2] / "data" / "sample_quiz.json"


class TestSQLitePreferenceStore:
    def test_missing_key_returns_none(self, preference_store):
        assert preference_store.get("source_url") is None

    def test_set_then_get(self, preference_store):
        preference_store.set("source_url", "https://a.example/q.json")
        assert preference_store.get("source_url") == "https://a.example/q.json"

    def test_set_overwrites(self, preference_store):
        preference_store.set("source_url", "https://a.example/q.json")
        preference_store.set("source_url", "https://b.example/q.json")

        assert preference_store.get("source_url") == "https://b.example/q.json"
        conn = preference_store.db_manager.get_connection()
        assert conn.execute("SELECT count(*) FROM preferences").fetchone()[0] == 1

    def test_survives_reopen_of_file_database(self, tmp_path):
        db_path = str(tmp_path / "db" / "iquiz.db")
        first = DatabaseManager(db_path)
        SQLitePreferenceStore(first).set("source_url", "https://keep.example")
        first.close()

        second = DatabaseManager(db_path)
        try:
            assert SQLitePreferenceStore(second).get("source_url") == "https://keep.example"
        finally:
            second.close()


class TestDatabaseManagerPickleSafety:
    def test_pickle_drops_connection_and_reconnects(self, tmp_path):
        manager = DatabaseManager(str(tmp_path / "iquiz.db"))
        SQLitePreferenceStore(manager).set("k", "v")

        restored = pickle.loads(pickle.dumps(manager))

        assert restored._shared_connection is None
        assert SQLitePreferenceStore(restored).get("k") == "v"
        manager.close()
        restored.close()


class TestFileDocumentCache:
    def test_load_without_file_returns_none(self, file_cache):
        assert file_cache.load() is None

    def test_save_creates_directory_and_round_trips(self, file_cache):
        file_cache.save(b'[{"title": "T"}]')
        assert file_cache.load() == b'[{"title": "T"}]'

    def test_save_replaces_previous_document(self, file_cache, tmp_path):
        file_cache.save(b"old")
        file_cache.save(b"new")

        assert file_cache.load() == b"new"
        leftovers = [p for p in (tmp_path / "cache").iterdir() if p.suffix == ".tmp"]
        assert leftovers == []


class TestDocumentSeeder:
    def test_seeds_empty_cache(self, file_cache, tmp_path, wire_document):
        seed = tmp_path / "seed.json"
        seed.write_text(json.dumps(wire_document), encoding="utf-8")

        assert DocumentSeeder(file_cache).seed_if_empty(str(seed)) is True
        assert json.loads(file_cache.load()) == wire_document

    def test_does_not_overwrite_existing_cache(self, file_cache, tmp_path, wire_document):
        file_cache.save(b"[]")
        seed = tmp_path / "seed.json"
        seed.write_text(json.dumps(wire_document), encoding="utf-8")

        assert DocumentSeeder(file_cache).seed_if_empty(str(seed)) is False
        assert file_cache.load() == b"[]"

    def test_missing_seed_file(self, file_cache, tmp_path):
        assert DocumentSeeder(file_cache).seed_if_empty(str(tmp_path / "nope.json")) is False
        assert file_cache.load() is None

    def test_invalid_seed_file_is_not_cached(self, file_cache, tmp_path):
        seed = tmp_path / "seed.json"
        seed.write_text("[{]", encoding="utf-8")

        assert DocumentSeeder(file_cache).seed_if_empty(str(seed)) is False
        assert file_cache.load() is None

    def test_bundled_sample_is_valid(self, file_cache):
        assert DocumentSeeder(file_cache).seed_if_empty(str(SAMPLE_DOCUMENT)) is True


class TestCacheFallbackEndToEnd:
    @staticmethod
    def _warm(preference_store, file_cache, wire_bytes):
        online = HttpDataProvider(
            transport=httpx.MockTransport(lambda r: httpx.Response(200, content=wire_bytes))
        )
        QuizService(online, preference_store, file_cache).load_topics("https://q.example/a.json")

    def test_service_falls_back_to_cache_on_network_failure(
        self, preference_store, file_cache, wire_bytes
    ):
        self._warm(preference_store, file_cache, wire_bytes)

        def unreachable(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("network is down", request=request)

        offline = HttpDataProvider(transport=httpx.MockTransport(unreachable))
        result = QuizService(offline, preference_store, file_cache).load_topics(
            "https://typo.example/a.json"
        )

        assert result.origin == DocumentOrigin.CACHE
        assert result.source_url == "https://q.example/a.json"
        assert [t.title for t in result.topics] == ["Mathematics", "Marvel Super Heroes"]

    @pytest.mark.parametrize("status", [404, 503])
    def test_error_status_does_not_fall_back(
        self, preference_store, file_cache, wire_bytes, status
    ):
        self._warm(preference_store, file_cache, wire_bytes)
        refusing = HttpDataProvider(
            transport=httpx.MockTransport(lambda r: httpx.Response(status))
        )

        with pytest.raises(FetchError, match=str(status)):
            QuizService(refusing, preference_store, file_cache).load_topics(
                "https://typo.example/a.json"
            )

        assert preference_store.get("source_url") == "https://q.example/a.json"
