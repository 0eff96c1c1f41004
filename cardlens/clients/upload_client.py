#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Artifact upload client.

Posts an exported artifact to the storage endpoint and returns the
download URL it is served from.

Response contract:
    200 {"success": true, "download_url": "..."}  -> download URL
    200 {"success": false, ...}                   -> UploadError
    non-2xx, optional {"detail": "..."}           -> UploadError
    transport error                               -> UploadError
"""

import httpx

from config.constants import UPLOAD_ENDPOINT
from config.logging_config import get_logger

from cardlens.export.errors import UploadError
from .base import ServiceClient, error_detail

logger = get_logger(__name__)


class UploadClient(ServiceClient):
    """Uploads artifacts and returns their download URL."""

    endpoint = UPLOAD_ENDPOINT

    async def upload(self, data: bytes, filename: str, content_type: str = "application/octet-stream") -> str:
        """
        Upload one artifact.

        Args:
            data: Artifact bytes.
            filename: Name sent with the multipart file field.
            content_type: MIME type of the artifact.

        Returns:
            Download URL of the stored artifact.

        Raises:
            UploadError: On transport failure or a non-success response.
        """
        logger.info(f"Uploading {filename} ({len(data):,} bytes) to {self.url_for(self.endpoint)}")

        try:
            response = await self.post_file(self.endpoint, data, filename, content_type)
            response.raise_for_status()
            payload = response.json()

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            detail = error_detail(e.response)
            logger.error(f"Upload failed: HTTP {status}: {detail or 'no detail'}")
            raise UploadError(
                f"Upload failed: HTTP {status}: {detail or 'Upload failed'}",
                status_code=status,
                detail=detail,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Upload transport error: {type(e).__name__}: {e}")
            raise UploadError(f"Upload transport error: {type(e).__name__}: {e}") from e
        except ValueError as e:
            raise UploadError(f"Upload response is not valid JSON: {e}", status_code=response.status_code) from e

        if not isinstance(payload, dict) or payload.get("success") is not True:
            detail = payload.get("detail") if isinstance(payload, dict) else None
            raise UploadError(
                f"Upload rejected: {detail or 'Upload failed'}",
                status_code=response.status_code,
                detail=detail,
            )

        download_url = payload.get("download_url")
        if not isinstance(download_url, str) or not download_url.strip():
            raise UploadError("Upload response has no download_url", status_code=response.status_code)

        logger.info(f"Upload complete: {download_url}")
        return download_url
