"""Cloudflare R2 implementation of BlobStore (S3-compatible API via boto3)."""

import logging
import os

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

R2_BUCKET_NAME = os.getenv('R2_BUCKET_NAME', '')
R2_ACCOUNT_ID = os.getenv('R2_ACCOUNT_ID', '')
R2_ACCESS_KEY_ID = os.getenv('R2_ACCESS_KEY_ID', '')
R2_SECRET_ACCESS_KEY = os.getenv('R2_SECRET_ACCESS_KEY', '')
R2_PREFIX = os.getenv('R2_SITES_PREFIX', 'sites')


def _content_type(key: str) -> str:
    if key.endswith('.html'):
        return 'text/html; charset=utf-8'
    if key.endswith('.css'):
        return 'text/css; charset=utf-8'
    if key.endswith('.js'):
        return 'application/javascript; charset=utf-8'
    return 'application/octet-stream'


class R2BlobStore:
    def __init__(self, client=None, bucket: str | None = None, prefix: str = R2_PREFIX):
        self._client = client
        self.bucket = bucket or R2_BUCKET_NAME
        self.prefix = prefix.strip('/')

    def _get_client(self):
        if self._client is None:
            self._client = boto3.client(
                's3',
                endpoint_url=f'https://{R2_ACCOUNT_ID}.r2.cloudflarestorage.com',
                aws_access_key_id=R2_ACCESS_KEY_ID,
                aws_secret_access_key=R2_SECRET_ACCESS_KEY,
                config=Config(signature_version='s3v4'),
            )
        return self._client

    def _object_key(self, key: str) -> str:
        return f"{self.prefix}/{key}" if self.prefix else key

    def write(self, key: str, content: str) -> bool:
        try:
            self._get_client().put_object(
                Bucket=self.bucket,
                Key=self._object_key(key),
                Body=content.encode('utf-8'),
                ContentType=_content_type(key),
            )
            return True
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error uploading to R2 (bucket={self.bucket}, key={key}): {e}")
            return False

    def read(self, key: str) -> str | None:
        try:
            response = self._get_client().get_object(Bucket=self.bucket, Key=self._object_key(key))
            return response['Body'].read().decode('utf-8')
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') in ('NoSuchKey', '404'):
                return None
            logger.error(f"Error downloading from R2 (bucket={self.bucket}, key={key}): {e}")
            return None
        except BotoCoreError as e:
            logger.error(f"Error downloading from R2 (bucket={self.bucket}, key={key}): {e}")
            return None

    def delete(self, key: str) -> bool:
        try:
            self._get_client().delete_object(Bucket=self.bucket, Key=self._object_key(key))
            return True
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error deleting from R2 (bucket={self.bucket}, key={key}): {e}")
            return False
