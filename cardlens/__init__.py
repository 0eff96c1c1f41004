#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Card Insight Export

Formats business card analysis text into styled HTML and exports the
rendered result as a shareable image or PDF referenced by a QR code.

Packages:
- formatting: analysis text -> safe, styled markup
- export: capture, artifact building, upload and QR encoding pipeline
- clients: HTTP clients for the analysis and storage endpoints
"""

__version__ = "1.0.0"

from .formatting import AnalysisFormatter, format_analysis
from .session import AnalysisSession

__all__ = [
    "AnalysisFormatter",
    "format_analysis",
    "AnalysisSession",
    "__version__",
]
