#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Formatting engine entry point.

Usage:
    from cardlens.formatting import format_analysis

    markup = format_analysis("【Contact】\n- **Jane Doe**\n- https://example.com")

The engine is pure and total: any input produces a string, and malformed
markup (an unclosed ** or a stray 【) is rendered as escaped literal text.
The source text is never modified; call format() again to re-render.
"""

from typing import List, Optional, Sequence

from config.logging_config import get_logger

from .rules import RewriteRule, DEFAULT_RULES
from .segments import Segment, text_segment, merge_text, render_segments
from .theme import FormattingTheme, DEFAULT_THEME

logger = get_logger(__name__)


class AnalysisFormatter:
    """
    Applies an ordered list of rewrite rules to analysis text.

    Args:
        theme: Inline styles for generated elements.
        rules: Rules to apply, in order. Defaults to DEFAULT_RULES.
    """

    def __init__(
        self,
        theme: Optional[FormattingTheme] = None,
        rules: Optional[Sequence[RewriteRule]] = None,
    ):
        self.theme = theme or DEFAULT_THEME
        self.rules = tuple(rules) if rules is not None else DEFAULT_RULES

    def segments(self, text) -> List[Segment]:
        """Run every rule and return the final segment list."""
        source = _normalise(text)
        segments = merge_text([text_segment(source)])
        for rule in self.rules:
            segments = rule.apply(segments, self.theme)
        return segments

    def format(self, text) -> str:
        """Format analysis text into HTML markup."""
        markup = render_segments(self.segments(text))
        logger.debug(f"Formatted analysis text into {len(markup)} chars of markup")
        return markup


def _normalise(text) -> str:
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)
    return text.replace("\r\n", "\n").replace("\r", "\n")


_default_formatter = AnalysisFormatter()


def format_analysis(text, theme: Optional[FormattingTheme] = None) -> str:
    """Format analysis text with the default rules."""
    if theme is None:
        return _default_formatter.format(text)
    return AnalysisFormatter(theme=theme).format(text)
