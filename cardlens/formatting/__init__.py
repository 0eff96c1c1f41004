#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Analysis Text Formatting Engine

Converts the small markup dialect found in analysis text (bracket links,
【section】 markers, **bold**, ---, "- " bullets, bare URLs) into safe,
styled HTML.

Stages:
1. Segmentation - source text becomes a single rewritable text segment
2. Rewrite rules - ordered rules split text segments into text + markup
3. Rendering - markup is emitted as-is, text is HTML-escaped
"""

from .segments import Segment, text_segment, markup_segment, merge_text, render_segments
from .theme import FormattingTheme, DEFAULT_THEME
from .rules import (
    RewriteRule,
    BracketLinkRule,
    LineBreakRule,
    SectionHeadingRule,
    HorizontalRuleRule,
    BulletRule,
    BoldRule,
    AutolinkRule,
    DEFAULT_RULES,
    SAFE_LINK_SCHEMES,
)
from .engine import AnalysisFormatter, format_analysis

__all__ = [
    # Segments
    "Segment",
    "text_segment",
    "markup_segment",
    "merge_text",
    "render_segments",
    # Theme
    "FormattingTheme",
    "DEFAULT_THEME",
    # Rules
    "RewriteRule",
    "BracketLinkRule",
    "LineBreakRule",
    "SectionHeadingRule",
    "HorizontalRuleRule",
    "BulletRule",
    "BoldRule",
    "AutolinkRule",
    "DEFAULT_RULES",
    "SAFE_LINK_SCHEMES",
    # Engine
    "AnalysisFormatter",
    "format_analysis",
]
