import os

from src.quiz.domain.errors import DecodeError
from src.quiz.domain.parser import parse_document
from src.quiz.domain.ports import ICacheStore
from src.shared.telemetry import Telemetry


class DocumentSeeder:
    """
    Puts the bundled sample document into an empty cache,
    so a first launch without network still has something to show.
    """

    def __init__(self, cache: ICacheStore) -> None:
        self.cache = cache
        self.telemetry = Telemetry("DocumentSeeder")

    def seed_if_empty(self, seed_file: str = "data/sample_quiz.json") -> bool:
        """Returns True when the cache was seeded."""
        if self.cache.load() is not None:
            return False

        if not os.path.exists(seed_file):
            self.telemetry.log_warning("Seed file NOT found", path=seed_file)
            return False

        with open(seed_file, "rb") as f:
            raw = f.read()

        try:
            topics = parse_document(raw)
        except DecodeError as e:
            self.telemetry.log_error("Seed file is invalid", e, path=seed_file)
            return False

        self.cache.save(raw)
        self.telemetry.log_info(f"Seeded cache with {len(topics)} topics.")
        return True
