"""
Log storage configuration from environment variables.
"""

import os

from logstore.services.storage.path_template import DEFAULT_PATH_FORMAT

LOG_STORAGE_BACKEND = os.environ.get('LOG_STORAGE_BACKEND', 's3')
LOG_STORAGE_BUCKET = os.environ.get('LOG_STORAGE_BUCKET')
LOG_STORAGE_PATH = os.environ.get('LOG_STORAGE_PATH', DEFAULT_PATH_FORMAT)
LOG_STORAGE_LOCAL_ROOT = os.environ.get('LOG_STORAGE_LOCAL_ROOT', '/data/log-storage')

S3_REGION = os.environ.get('S3_REGION')
S3_ENDPOINT_URL = os.environ.get('S3_ENDPOINT_URL')
if S3_ENDPOINT_URL:
    S3_ENDPOINT_URL = S3_ENDPOINT_URL.split('#')[0].strip()
S3_ACCESS_KEY_ID = os.environ.get('S3_ACCESS_KEY_ID')
S3_SECRET_ACCESS_KEY = os.environ.get('S3_SECRET_ACCESS_KEY')
S3_SESSION_TOKEN = os.environ.get('S3_SESSION_TOKEN')
S3_USE_PATH_STYLE = os.environ.get('S3_USE_PATH_STYLE', 'false').lower() == 'true'
S3_VERIFY_SSL = os.environ.get('S3_VERIFY_SSL', 'true').lower() == 'true'

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
