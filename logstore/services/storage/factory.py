"""Factory for configuring the log storage plugin from environment variables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigurationError
from .local import LocalStorageBackend
from .path_template import DEFAULT_PATH_FORMAT
from .plugin import ExecutionFileStoragePlugin
from .s3 import S3StorageBackend

SUPPORTED_BACKENDS = ('s3', 'local')


@dataclass
class StorageSettings:
    backend: str = 's3'
    bucket: Optional[str] = None
    path: str = DEFAULT_PATH_FORMAT
    local_root: str = '/data/log-storage'
    s3_region: Optional[str] = None
    s3_endpoint_url: Optional[str] = None
    s3_access_key_id: Optional[str] = None
    s3_secret_access_key: Optional[str] = None
    s3_session_token: Optional[str] = None
    s3_use_path_style: bool = False
    s3_verify_ssl: bool = True


def load_storage_settings_from_env() -> StorageSettings:
    from logstore.config import app_config

    return StorageSettings(
        backend=(app_config.LOG_STORAGE_BACKEND or 's3').strip().lower() or 's3',
        bucket=app_config.LOG_STORAGE_BUCKET,
        path=app_config.LOG_STORAGE_PATH,
        local_root=app_config.LOG_STORAGE_LOCAL_ROOT,
        s3_region=app_config.S3_REGION,
        s3_endpoint_url=app_config.S3_ENDPOINT_URL,
        s3_access_key_id=app_config.S3_ACCESS_KEY_ID,
        s3_secret_access_key=app_config.S3_SECRET_ACCESS_KEY,
        s3_session_token=app_config.S3_SESSION_TOKEN,
        s3_use_path_style=bool(app_config.S3_USE_PATH_STYLE),
        s3_verify_ssl=bool(app_config.S3_VERIFY_SSL),
    )


def build_local_backend(settings: StorageSettings) -> LocalStorageBackend:
    return LocalStorageBackend(settings.local_root)


def build_s3_backend(settings: StorageSettings) -> S3StorageBackend:
    return S3StorageBackend(
        region=settings.s3_region,
        endpoint_url=settings.s3_endpoint_url,
        access_key_id=settings.s3_access_key_id,
        secret_access_key=settings.s3_secret_access_key,
        session_token=settings.s3_session_token,
        use_path_style=settings.s3_use_path_style,
        verify_ssl=settings.s3_verify_ssl,
    )


def build_backend(settings: StorageSettings):
    if settings.backend == 's3':
        return build_s3_backend(settings)
    if settings.backend == 'local':
        return build_local_backend(settings)
    raise ConfigurationError(
        f"Unknown storage backend: {settings.backend}. Available: {list(SUPPORTED_BACKENDS)}"
    )


def create_plugin(settings: StorageSettings) -> ExecutionFileStoragePlugin:
    return ExecutionFileStoragePlugin(settings.bucket, settings.path, backend=build_backend(settings))


def create_plugin_from_env() -> ExecutionFileStoragePlugin:
    return create_plugin(load_storage_settings_from_env())
