"""
Upload relay to Cloudinary and image URL checks.

Uploaded files are forwarded as-is; nothing is written to local storage. Image URL
fields accept any http(s) URL, but URLs outside the trusted media hosts are logged so
operators can spot images that bypassed the upload relay.
"""

import asyncio
import io
from urllib.parse import urlparse

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from app.config import settings
from app.utils.logger import setup_logger

logger = setup_logger("media_service")


class UploadError(Exception):
    """The media host could not store the file."""


def is_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def warn_if_untrusted_image(field: str, url: str | None) -> bool:
    """Log a warning when ``url`` is not served by a trusted media host.

    Returns True when the URL is trusted (or empty).
    """
    if not url:
        return True
    host = (urlparse(url).hostname or "").lower()
    trusted = any(
        host == allowed or host.endswith("." + allowed)
        for allowed in settings.trusted_image_hosts
    )
    if not trusted:
        logger.warning(f"{field} is not from a trusted media host: {url}")
    return trusted


class MediaUploader:
    """Forwards files to Cloudinary and returns their public URL."""

    def __init__(
        self,
        cloud_name: str | None = None,
        api_key: str | None = None,
        api_secret: str | None = None,
        folder: str | None = None,
    ):
        self.cloud_name = cloud_name or settings.cloudinary_cloud_name
        self.api_key = api_key or settings.cloudinary_api_key
        self.api_secret = api_secret or settings.cloudinary_api_secret
        self.folder = folder or settings.cloudinary_folder

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def _upload_sync(self, content: bytes, filename: str | None) -> dict:
        file_obj = io.BytesIO(content)
        if filename:
            file_obj.name = filename
        return cloudinary.uploader.upload(
            file_obj,
            resource_type="image",
            folder=self.folder,
            overwrite=False,
            cloud_name=self.cloud_name,
            api_key=self.api_key,
            api_secret=self.api_secret,
            secure=True,
        )

    async def upload(self, content: bytes, filename: str | None = None) -> dict:
        """
        Upload ``content`` and return ``{"url": ..., "public_id": ...}``.

        Raises UploadError for any failure on the media host side.
        """
        if not self.configured:
            logger.error("Upload attempted but Cloudinary credentials are not set")
            raise UploadError("Media host is not configured")

        try:
            result = await asyncio.to_thread(self._upload_sync, content, filename)
        except CloudinaryError as e:
            logger.error(f"Cloudinary rejected upload of '{filename}': {e}")
            raise UploadError("Media host rejected the file") from e
        except Exception as e:
            logger.error(
                f"Unexpected error uploading '{filename}' to Cloudinary: {e}",
                exc_info=True,
            )
            raise UploadError("Media host request failed") from e

        url = result.get("secure_url") or result.get("url")
        if not url:
            logger.error(f"Cloudinary response for '{filename}' had no URL: {result}")
            raise UploadError("Media host returned no URL")

        logger.info(f"Uploaded '{filename}' to {url}")
        return {"url": url, "public_id": result.get("public_id")}


def get_media_uploader() -> MediaUploader:
    """FastAPI dependency; overridden in tests."""
    return MediaUploader()


__all__ = [
    "MediaUploader",
    "UploadError",
    "get_media_uploader",
    "is_http_url",
    "warn_if_untrusted_image",
]
