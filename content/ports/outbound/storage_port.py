from typing import Protocol


class StoragePort(Protocol):
    """Object storage for uploaded images. Implementations may block; callers run them off-loop."""

    def upload(self, key: str, data: bytes, content_type: str | None = None) -> str: ...

    def delete(self, key: str) -> None: ...
