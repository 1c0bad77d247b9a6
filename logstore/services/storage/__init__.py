"""Execution log storage on S3-compatible and local blob stores."""

from .exceptions import AdapterError, ConfigurationError, LogStorageError
from .factory import StorageSettings, build_backend, create_plugin, create_plugin_from_env, load_storage_settings_from_env
from .interfaces import ExecutionContext, RetrievedObject, StoredBlob, StoredObject
from .local import LocalStorageBackend
from .locator import build_local_locator, build_s3_locator, resolved_filepath
from .path_template import DEFAULT_PATH_FORMAT, EXECID_PLACEHOLDER, expand_path
from .plugin import ExecutionFileStoragePlugin
from .s3 import S3StorageBackend

__all__ = [
    'AdapterError',
    'ConfigurationError',
    'LogStorageError',
    'StorageSettings',
    'build_backend',
    'create_plugin',
    'create_plugin_from_env',
    'load_storage_settings_from_env',
    'ExecutionContext',
    'RetrievedObject',
    'StoredBlob',
    'StoredObject',
    'LocalStorageBackend',
    'build_local_locator',
    'build_s3_locator',
    'resolved_filepath',
    'DEFAULT_PATH_FORMAT',
    'EXECID_PLACEHOLDER',
    'expand_path',
    'ExecutionFileStoragePlugin',
    'S3StorageBackend',
]
