"""Local filesystem blob store backend."""

from __future__ import annotations

import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Optional

from .interfaces import StoredBlob
from .locator import build_local_locator, local_path_from_key


class LocalStorageBackend:
    """Filesystem implementation of the blob store contract, objects live at <root>/<bucket>/<key>."""

    def __init__(self, root: str):
        self.root = str(Path(root))
        Path(self.root).mkdir(parents=True, exist_ok=True)

    def build_locator(self, bucket: str, key: str) -> str:
        return build_local_locator(bucket, key)

    def resolve_path(self, bucket: str, key: str) -> str:
        return local_path_from_key(self.root, bucket, key)

    def exists(self, bucket: str, key: str) -> bool:
        return os.path.isfile(self.resolve_path(bucket, key))

    def put(self, bucket: str, key: str, data: bytes, last_modified: Optional[datetime] = None) -> StoredBlob:
        dst = self.resolve_path(bucket, key)
        Path(dst).parent.mkdir(parents=True, exist_ok=True)

        # Write beside the target and rename so readers never see a partial object.
        fd, tmp_path = tempfile.mkstemp(prefix='.logstore_', dir=os.path.dirname(dst))
        try:
            with os.fdopen(fd, 'wb') as out_f:
                out_f.write(data)
            os.replace(tmp_path, dst)
        except BaseException:
            try:
                os.remove(tmp_path)
            except FileNotFoundError:
                pass
            raise

        if last_modified is not None:
            ts = last_modified.timestamp()
            os.utime(dst, (ts, ts))
        return StoredBlob(locator=self.build_locator(bucket, key), size=os.path.getsize(dst))

    def get(self, bucket: str, key: str) -> Optional[bytes]:
        path = self.resolve_path(bucket, key)
        try:
            with open(path, 'rb') as in_f:
                return in_f.read()
        except FileNotFoundError:
            return None
