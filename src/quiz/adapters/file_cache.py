import os
import tempfile

from src.quiz.domain.ports import ICacheStore
from src.shared.telemetry import Telemetry


class FileDocumentCache(ICacheStore):
    """Keeps the raw bytes of the last document that parsed cleanly."""

    def __init__(self, path: str = "data/quiz_cache.json") -> None:
        self.path = path
        self.telemetry = Telemetry("FileDocumentCache")

    def save(self, document: bytes) -> None:
        dir_name = os.path.dirname(self.path) or "."
        os.makedirs(dir_name, exist_ok=True)

        # Write-then-rename so a crash never leaves half a document behind
        fd, tmp_path = tempfile.mkstemp(dir=dir_name, suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(document)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

        self.telemetry.log_info("Document cached", path=self.path, size=len(document))

    def load(self) -> bytes | None:
        if not os.path.exists(self.path):
            return None
        with open(self.path, "rb") as f:
            return f.read()
