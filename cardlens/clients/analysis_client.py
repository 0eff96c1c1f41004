#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Business card analysis client.

Submits an image to the analysis endpoint and returns the analysis text.
Remote faults never raise: every outcome becomes displayable text, and
AnalysisResult.succeeded tells callers whether that text is a real
analysis worth exporting.
"""

from dataclasses import dataclass

import httpx

from config.constants import (
    ANALYSIS_ENDPOINT,
    NO_RESULT_MESSAGE,
    NO_DETAILS_MESSAGE,
    ERROR_MESSAGE_TEMPLATE,
    COMMUNICATION_ERROR_TEMPLATE,
)
from config.logging_config import get_logger

from .base import ServiceClient

logger = get_logger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Analysis text plus whether it came from a successful analysis."""
    text: str
    succeeded: bool = False


def interpret_payload(payload) -> AnalysisResult:
    """Map a decoded response body to an AnalysisResult."""
    if not isinstance(payload, dict):
        return AnalysisResult(NO_RESULT_MESSAGE)

    if payload.get("error"):
        return AnalysisResult(ERROR_MESSAGE_TEMPLATE.format(
            error=payload["error"],
            details=payload.get("details") or NO_DETAILS_MESSAGE,
        ))

    summary = payload.get("summary")
    if isinstance(summary, str) and summary:
        return AnalysisResult(summary, succeeded=True)

    return AnalysisResult(NO_RESULT_MESSAGE)


class AnalysisClient(ServiceClient):
    """Sends card images to the analysis backend."""

    endpoint = ANALYSIS_ENDPOINT

    async def analyze(self, image: bytes, filename: str = "card.jpg", content_type: str = "image/jpeg") -> AnalysisResult:
        """
        Analyze one image.

        Args:
            image: Image bytes.
            filename: Name sent with the multipart file field.
            content_type: MIME type of the image.

        Returns:
            AnalysisResult; never raises for remote or transport faults.
        """
        logger.info(f"Submitting {filename} ({len(image):,} bytes) for analysis")

        try:
            response = await self.post_file(self.endpoint, image, filename, content_type)
            response.raise_for_status()
            payload = response.json()

        except httpx.HTTPStatusError as e:
            reason = f"HTTP {e.response.status_code}: {e.response.text[:200]}"
            logger.error(f"Analysis request failed: {reason}")
            return AnalysisResult(COMMUNICATION_ERROR_TEMPLATE.format(reason=reason))
        except httpx.HTTPError as e:
            reason = f"{type(e).__name__}: {e}"
            logger.error(f"Analysis transport error: {reason}")
            return AnalysisResult(COMMUNICATION_ERROR_TEMPLATE.format(reason=reason))
        except ValueError as e:
            logger.error(f"Analysis response is not valid JSON: {e}")
            return AnalysisResult(NO_RESULT_MESSAGE)

        result = interpret_payload(payload)
        if result.succeeded:
            logger.info(f"Analysis complete: {len(result.text)} chars")
        else:
            logger.warning(f"Analysis returned no usable summary: {result.text[:100]}")
        return result
