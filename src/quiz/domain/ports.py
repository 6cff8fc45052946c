from abc import ABC, abstractmethod


class IDataProvider(ABC):
    @abstractmethod
    def fetch(self, source_id: str) -> bytes:
        """
        Returns the raw document for `source_id`, or raises FetchError.
        One attempt; retries, if any, belong to the implementation.
        """
        pass


class IPreferenceStore(ABC):
    @abstractmethod
    def get(self, key: str) -> str | None:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass


class ICacheStore(ABC):
    """Last-known-good copy of the quiz document."""

    @abstractmethod
    def save(self, document: bytes) -> None:
        pass

    @abstractmethod
    def load(self) -> bytes | None:
        pass
