"""
HTTP clients for the remote analysis and storage endpoints.
"""

from .base import ServiceClient
from .analysis_client import AnalysisClient, AnalysisResult
from .upload_client import UploadClient

__all__ = [
    "ServiceClient",
    "AnalysisClient",
    "AnalysisResult",
    "UploadClient",
]
