#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Intermediate representation for the formatting engine.

A text segment is raw source text that later rules may still rewrite.
A markup segment is HTML produced by a rule; no later rule looks inside it.
Text is escaped only when the segments are rendered.
"""

import html
from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True)
class Segment:
    """One piece of partially formatted text."""
    content: str
    is_markup: bool = False
    breaks_line: bool = False  # markup after which a new visual line starts
    inline_element: bool = False  # complete element such as an anchor


def text_segment(content: str) -> Segment:
    return Segment(content)


def markup_segment(content: str, breaks_line: bool = False, inline_element: bool = False) -> Segment:
    return Segment(content, is_markup=True, breaks_line=breaks_line, inline_element=inline_element)


def merge_text(segments: Iterable[Segment]) -> List[Segment]:
    """Coalesce adjacent text segments and drop empty ones."""
    merged: List[Segment] = []
    for segment in segments:
        if not segment.is_markup:
            if not segment.content:
                continue
            if merged and not merged[-1].is_markup:
                merged[-1] = text_segment(merged[-1].content + segment.content)
                continue
        merged.append(segment)
    return merged


def render_segments(segments: Iterable[Segment]) -> str:
    """Join segments into the final markup string."""
    return "".join(
        segment.content if segment.is_markup else html.escape(segment.content, quote=False)
        for segment in segments
    )
