"""In-memory blob storage, for tests and throwaway sessions."""

from typing import Optional

from accountant.services.storage.interface import BlobStoreInterface


class InMemoryBlobStore(BlobStoreInterface):
    """Dict-backed blob store. Nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, bytes]] = None):
        self._values: dict[str, bytes] = dict(initial or {})
        self.write_count = 0

    def get(self, key: str) -> Optional[bytes]:
        return self._values.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._values[key] = bytes(value)
        self.write_count += 1

    def remove(self, key: str) -> bool:
        return self._values.pop(key, None) is not None

    def keys(self) -> list[str]:
        return list(self._values)
