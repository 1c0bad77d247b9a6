"""Locator and key helpers for local and S3 log storage."""

from __future__ import annotations

from pathlib import Path

LOCAL_SCHEME = 'local://'
S3_SCHEME = 's3://'


def _normalize_key(key: str) -> str:
    key = (key or '').replace('\\', '/').strip()
    while '//' in key:
        key = key.replace('//', '/')
    return key.lstrip('/')


def resolved_filepath(expanded_path: str, file_type: str) -> str:
    """Storage key for one file-type variant of an execution's log."""
    return f"{expanded_path}.{file_type}"


def build_local_locator(bucket: str, key: str) -> str:
    return f"{LOCAL_SCHEME}{bucket}/{_normalize_key(key)}"


def build_s3_locator(bucket: str, key: str) -> str:
    return f"{S3_SCHEME}{bucket}/{_normalize_key(key)}"


def local_path_from_key(local_root: str, bucket: str, key: str) -> str:
    """Resolve bucket/key under local_root and prevent path traversal."""
    safe_key = _normalize_key(f"{bucket}/{key}")
    root = Path(local_root).resolve()
    candidate = (root / Path(*safe_key.split('/'))).resolve()
    try:
        candidate.relative_to(root / bucket)
    except Exception as exc:
        raise ValueError(f"Local storage key resolves outside bucket root: {bucket}/{key}") from exc
    return str(candidate)
