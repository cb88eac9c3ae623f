"""Blob storage for uploaded resource files: Supabase Storage, or S3 when configured."""
import boto3
from botocore.exceptions import ClientError
from supabase import Client
from studyhub.config import settings
from studyhub.core.exceptions import BackendError
import logging

logger = logging.getLogger(__name__)


def resource_key(user_id: str, file_name: str) -> str:
    return f"resources/{user_id}/{file_name}"


class SupabaseStorage:
    def __init__(self, supabase: Client, bucket_name: str = None):
        self.bucket_name = bucket_name or settings.resources_bucket
        self._bucket = supabase.storage.from_(self.bucket_name)

    def upload_file(self, file_content: bytes, key: str, content_type: str) -> str:
        """Upload file to the bucket and return its public download URL"""
        try:
            self._bucket.upload(key, file_content, {"content-type": content_type})
            return self._bucket.get_public_url(key)
        except Exception as e:
            logger.error(f"Failed to upload file to Supabase Storage ({key}): {e}")
            raise BackendError(str(e), operation="upload file")

    def delete_file(self, key: str) -> bool:
        try:
            self._bucket.remove([key])
            return True
        except Exception as e:
            logger.error(f"Failed to delete file from Supabase Storage ({key}): {e}")
            raise BackendError(str(e), operation="delete file")


class S3Storage:
    def __init__(self):
        if not settings.s3_configured:
            raise ValueError("AWS S3 credentials and bucket name must be configured")

        self.s3_client = boto3.client(
            's3',
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.aws_region
        )
        self.bucket_name = settings.s3_bucket_name

    def upload_file(self, file_content: bytes, key: str, content_type: str) -> str:
        """Upload file to S3 and return its object URL"""
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=file_content,
                ContentType=content_type
            )
            return f"https://{self.bucket_name}.s3.{settings.aws_region}.amazonaws.com/{key}"
        except ClientError as e:
            logger.error(f"Failed to upload file to S3: {str(e)}")
            raise BackendError(str(e), operation="upload file")

    def delete_file(self, key: str) -> bool:
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
            return True
        except ClientError as e:
            logger.error(f"Failed to delete file from S3: {str(e)}")
            raise BackendError(str(e), operation="delete file")


def build_storage(supabase: Client):
    if settings.s3_configured:
        logger.debug("Using S3 storage for resources")
        return S3Storage()
    return SupabaseStorage(supabase)
