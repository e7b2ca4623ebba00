# app/services/storage_service.py
from abc import ABC, abstractmethod
from functools import lru_cache

from azure.storage.blob import BlobServiceClient, ContentSettings
from supabase import create_client

from app.config import settings
from app.core.logger import logger


class StorageProvider(ABC):
    """Put/delete blobs by path. Errors propagate to the caller."""

    @abstractmethod
    def upload_file(self, content: bytes, path: str, content_type: str | None = None) -> str:
        """Store content at path and return a locator for it"""

    @abstractmethod
    def delete_file(self, path: str) -> None:
        """Remove the blob at path"""


class AzureBlobStorage(StorageProvider):
    """Azure Blob Storage, one container"""

    def __init__(self, connection_string: str, container_name: str):
        if not connection_string:
            raise RuntimeError("AZURE_STORAGE_CONNECTION_STRING is not set.")
        self.client = BlobServiceClient.from_connection_string(connection_string)
        self.container_name = container_name

    def upload_file(self, content: bytes, path: str, content_type: str | None = None) -> str:
        blob_client = self.client.get_blob_client(container=self.container_name, blob=path)
        blob_client.upload_blob(
            content,
            overwrite=True,
            content_settings=ContentSettings(content_type=content_type) if content_type else None
        )
        return blob_client.url

    def delete_file(self, path: str) -> None:
        blob_client = self.client.get_blob_client(container=self.container_name, blob=path)
        blob_client.delete_blob()


class SupabaseStorage(StorageProvider):
    """Supabase Storage, one bucket"""

    def __init__(self, url: str, key: str, bucket: str):
        if not url or not key:
            raise RuntimeError("SUPABASE_URL and SUPABASE_KEY must be set.")
        self.client = create_client(url, key)
        self.bucket = bucket

    def upload_file(self, content: bytes, path: str, content_type: str | None = None) -> str:
        file_options = {"content-type": content_type} if content_type else None
        self.client.storage.from_(self.bucket).upload(path, content, file_options)
        return path

    def delete_file(self, path: str) -> None:
        self.client.storage.from_(self.bucket).remove([path])


@lru_cache
def get_storage() -> StorageProvider:
    """Provider picked once per process from STORAGE_PROVIDER"""
    if settings.storage_provider == "AZURE":
        logger.info(f"Storage provider: Azure (container={settings.azure_container})")
        return AzureBlobStorage(settings.azure_storage_connection_string, settings.azure_container)

    logger.info(f"Storage provider: Supabase (bucket={settings.supabase_bucket})")
    return SupabaseStorage(settings.supabase_url, settings.supabase_key, settings.supabase_bucket)


def delete_quietly(storage: StorageProvider, path: str) -> bool:
    """Best-effort delete. Failures are logged, never raised."""
    try:
        storage.delete_file(path)
        return True
    except Exception as e:
        logger.warning(f"Storage delete failed ({path}): {e}")
        return False
