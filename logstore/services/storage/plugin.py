"""Execution file storage plugin: archives an execution's log files in a blob store."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, BinaryIO, Dict, Mapping, Optional, Union

from .exceptions import AdapterError, ConfigurationError
from .interfaces import BlobStore, ExecutionContext, RetrievedObject, StoredObject
from .locator import resolved_filepath
from .path_template import DEFAULT_PATH_FORMAT, EXECID_PLACEHOLDER, SEPARATOR, expand_path, has_execid_placeholder

logger = logging.getLogger(__name__)

PLUGIN_SERVICE = 'ExecutionFileStorage'
PLUGIN_NAME = 'logstore.s3-storage'

EXPANSION_VARIABLES = {
    '${job.execid}': 'execution ID',
    '${job.project}': 'project name',
    '${job.id}': 'job UUID (or blank).',
    '${job.group}': 'job group (or blank).',
    '${job.name}': 'job name (or blank).',
}


class ExecutionFileStoragePlugin:
    """
    Stores log files for one execution under a per-execution key prefix.

    Two-phase lifecycle: the constructor takes the bucket/path settings,
    initialize() validates them and fixes the expanded path, and the storage
    operations then resolve keys against that path.
    """

    def __init__(self, bucket: Optional[str], path: Optional[str] = DEFAULT_PATH_FORMAT,
                 backend: Optional[BlobStore] = None):
        self.bucket = bucket
        self.path = path
        if backend is None:
            from .s3 import S3StorageBackend
            backend = S3StorageBackend()
        self.backend = backend
        self.context: Optional[ExecutionContext] = None
        self._expanded_path: Optional[str] = None

    @property
    def expanded_path(self) -> Optional[str]:
        return self._expanded_path

    def initialize(self, context: Union[ExecutionContext, Mapping[str, Any], None]) -> str:
        """
        Validate configuration and compute the expanded path for this execution.

        Args:
            context: ExecutionContext or the host's mapping of job values

        Returns:
            The expanded path every storage key is derived from

        Raises:
            ConfigurationError: If bucket or path are unusable
        """
        if self._expanded_path is not None:
            raise ConfigurationError('plugin already initialized')

        if not isinstance(context, ExecutionContext):
            context = ExecutionContext.from_mapping(context)

        if not self.bucket or not self.bucket.strip():
            raise ConfigurationError('bucket was not set')

        if not self.path or not self.path.strip():
            raise ConfigurationError('path was not set')

        if not has_execid_placeholder(self.path) and not self.path.endswith(SEPARATOR):
            raise ConfigurationError(f'path must contain {EXECID_PLACEHOLDER} or end with {SEPARATOR}')

        config_path = self.path
        if not has_execid_placeholder(config_path):
            config_path = config_path + EXECID_PLACEHOLDER
        expanded = expand_path(config_path, context)

        if not expanded.strip():
            raise ConfigurationError('expanded value of path was empty')
        if expanded.endswith(SEPARATOR):
            raise ConfigurationError(f'expanded value of path must not end with {SEPARATOR}')

        self.context = context
        self._expanded_path = expanded
        logger.debug(f"Path that will be used: {expanded}")
        return expanded

    def resolved_filepath(self, file_type: str) -> str:
        if self._expanded_path is None:
            raise ConfigurationError('plugin was not initialized')
        if not file_type or not file_type.strip():
            raise ValueError('file type was not set')
        return resolved_filepath(self._expanded_path, file_type)

    def is_available(self, file_type: str) -> bool:
        key = self.resolved_filepath(file_type)
        try:
            return bool(self.backend.exists(self.bucket, key))
        except Exception as e:
            logger.error(f"Availability check failed for {self.bucket}/{key}: {e}", exc_info=True)
            raise AdapterError(str(e), cause=e, key=key) from e

    def store(self, file_type: str, stream: BinaryIO, length: int = -1,
              last_modified: Optional[datetime] = None) -> StoredObject:
        """
        Read the whole stream and write it as a single object.

        The stream is always closed. Errors reading it propagate unchanged,
        failures of the blob store raise AdapterError.
        """
        try:
            key = self.resolved_filepath(file_type)
            contents = stream.read()
        finally:
            stream.close()

        if length is not None and length >= 0 and length != len(contents):
            logger.warning(f"Expected {length} bytes for {key} but read {len(contents)}")

        logger.debug(f"Storing content to bucket {self.bucket} path {key}")
        try:
            blob = self.backend.put(self.bucket, key, contents, last_modified=last_modified)
        except Exception as e:
            logger.error(f"Store failed for {self.bucket}/{key}: {e}", exc_info=True)
            raise AdapterError(str(e), cause=e, key=key) from e
        return StoredObject(locator=blob.locator, key=key, size=blob.size, etag=blob.etag)

    def retrieve(self, file_type: str, sink: BinaryIO) -> RetrievedObject:
        """
        Write the stored object to sink, closing sink on every path.

        A missing object is not an error: the result has found=False and
        nothing is written.
        """
        try:
            key = self.resolved_filepath(file_type)
            locator = self.backend.build_locator(self.bucket, key)
            logger.debug(f"Retrieving content from bucket {self.bucket} path {key}")
            try:
                content = self.backend.get(self.bucket, key)
                if content is None:
                    return RetrievedObject(locator=locator, key=key, found=False)
                sink.write(content)
                return RetrievedObject(locator=locator, key=key, found=True, size=len(content))
            except Exception as e:
                logger.error(f"Retrieve failed for {self.bucket}/{key}: {e}", exc_info=True)
                raise AdapterError(str(e), cause=e, key=key) from e
        finally:
            sink.close()

    @classmethod
    def describe(cls) -> Dict[str, Any]:
        """Plugin metadata for the host's plugin listing."""
        variables = '\n'.join(f"* `{name}` = {desc}" for name, desc in EXPANSION_VARIABLES.items())
        return {
            'service': PLUGIN_SERVICE,
            'name': PLUGIN_NAME,
            'title': 'S3 Storage',
            'description': 'Stores log files in an S3-compatible bucket',
            'properties': [
                {
                    'name': 'bucket',
                    'title': 'Bucket name',
                    'required': True,
                    'description': 'Bucket to store files in',
                    'default': None,
                },
                {
                    'name': 'path',
                    'title': 'Path',
                    'required': True,
                    'description': (
                        'The path in the bucket to store a log file. '
                        f'Default: {DEFAULT_PATH_FORMAT}\n\n'
                        f'You can use these expansion variables: \n\n{variables}\n'
                    ),
                    'default': DEFAULT_PATH_FORMAT,
                },
            ],
        }
