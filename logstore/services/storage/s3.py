"""S3-compatible blob store backend (AWS S3 / MinIO / GCS interoperability)."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from .interfaces import StoredBlob
from .locator import build_s3_locator

# HEAD responses carry no error body, so a bare 404 is all there is to go on.
HEAD_NOT_FOUND_CODES = ('404', 'NoSuchKey', 'NotFound')
# GET responses name the error, and only a missing key means the object is absent.
GET_NOT_FOUND_CODES = ('NoSuchKey',)


def _error_code(exc) -> str:
    response = getattr(exc, 'response', {}) or {}
    return str((response.get('Error') or {}).get('Code') or '')


def _status_code(exc) -> Optional[int]:
    response = getattr(exc, 'response', {}) or {}
    return (response.get('ResponseMetadata') or {}).get('HTTPStatusCode')


class S3StorageBackend:
    """S3 storage backend with lazy boto3 initialization."""

    def __init__(self, *, region: Optional[str] = None, endpoint_url: Optional[str] = None,
                 access_key_id: Optional[str] = None, secret_access_key: Optional[str] = None,
                 session_token: Optional[str] = None, use_path_style: bool = False,
                 verify_ssl: bool = True, client=None):
        self.region = region
        self.endpoint_url = endpoint_url
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.session_token = session_token
        self.use_path_style = use_path_style
        self.verify_ssl = verify_ssl
        self._client = client

    def _client_kwargs(self) -> dict:
        optional = {
            'region_name': self.region,
            'endpoint_url': self.endpoint_url,
            'aws_access_key_id': self.access_key_id,
            'aws_secret_access_key': self.secret_access_key,
            'aws_session_token': self.session_token,
        }
        kwargs = {name: value for name, value in optional.items() if value}
        kwargs['service_name'] = 's3'
        kwargs['verify'] = self.verify_ssl
        return kwargs

    def _get_client(self):
        if self._client is None:
            try:
                import boto3
                from botocore.config import Config
            except Exception as exc:
                raise RuntimeError('S3 backend requires boto3 and botocore installed') from exc

            config = Config(
                signature_version='s3v4',
                s3={'addressing_style': 'path' if self.use_path_style else 'auto'},
            )
            self._client = boto3.client(config=config, **self._client_kwargs())
        return self._client

    def build_locator(self, bucket: str, key: str) -> str:
        return build_s3_locator(bucket, key)

    def exists(self, bucket: str, key: str) -> bool:
        from botocore.exceptions import ClientError

        client = self._get_client()
        try:
            data = client.head_object(Bucket=bucket, Key=key)
        except ClientError as exc:
            if _status_code(exc) == 404 or _error_code(exc) in HEAD_NOT_FOUND_CODES:
                return False
            raise
        # A versioned bucket can answer with a delete marker for a removed object.
        return not data.get('DeleteMarker', False)

    def put(self, bucket: str, key: str, data: bytes, last_modified: Optional[datetime] = None) -> StoredBlob:
        client = self._get_client()
        params = {'Bucket': bucket, 'Key': key, 'Body': data}
        if last_modified is not None:
            params['Metadata'] = {'source-last-modified': last_modified.isoformat()}
        response = client.put_object(**params)
        etag = (response.get('ETag') or '').strip('"') or None
        return StoredBlob(locator=self.build_locator(bucket, key), size=len(data), etag=etag)

    def get(self, bucket: str, key: str) -> Optional[bytes]:
        from botocore.exceptions import ClientError

        client = self._get_client()
        try:
            response = client.get_object(Bucket=bucket, Key=key)
        except ClientError as exc:
            if _error_code(exc) in GET_NOT_FOUND_CODES:
                return None
            raise
        if response.get('DeleteMarker', False):
            return None
        body = response['Body']
        try:
            return body.read()
        finally:
            body.close()
