"""Storage interfaces and shared dataclasses for log storage backends."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Protocol


@dataclass(frozen=True)
class ExecutionContext:
    """Runtime data describing the execution whose log is archived."""

    execid: Optional[str] = None
    project: Optional[str] = None
    id: Optional[str] = None  # job UUID, blank for ad-hoc executions
    group: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> 'ExecutionContext':
        """Build a context from the host's loose mapping, dropping None values and unknown keys."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        values = {k: str(v) for k, v in data.items() if k in known and v is not None}
        return cls(**values)

    def as_mapping(self) -> Dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass
class StoredBlob:
    """What a backend reports back after a put."""

    locator: str
    size: int
    etag: Optional[str] = None


@dataclass
class StoredObject:
    """Result of storing a log file."""

    locator: str
    key: str
    size: int
    etag: Optional[str] = None

    def __bool__(self) -> bool:
        return True


@dataclass
class RetrievedObject:
    """Result of retrieving a log file. An absent object is a success with found=False."""

    locator: str
    key: str
    found: bool
    size: int = 0

    def __bool__(self) -> bool:
        return True


class BlobStore(Protocol):
    """Contract every blob-store backend implements."""

    def build_locator(self, bucket: str, key: str) -> str:
        ...

    def exists(self, bucket: str, key: str) -> bool:
        ...

    def put(self, bucket: str, key: str, data: bytes, last_modified: Optional[datetime] = None) -> StoredBlob:
        ...

    def get(self, bucket: str, key: str) -> Optional[bytes]:
        ...
