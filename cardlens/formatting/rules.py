#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Rewrite rules for the analysis markup dialect.

Each rule rewrites text segments only and leaves markup segments alone.
Bold and heading markers may enclose complete inline elements (anchors):
those rules see each anchor as one opaque placeholder character.
Pieces a rule produces are never rescanned by the same rule, so every
rule runs exactly once over the text that earlier rules left behind.

Rule order (see DEFAULT_RULES):
1. [label](url)       -> anchor
2. \\n\\n / \\n         -> <br><br> / <br>
3. 【heading】        -> block heading
4. ---                -> divider
5. "- " at line start -> bullet glyph
6. **text**           -> strong
7. bare http(s) URL   -> anchor
"""

import html
import re
from typing import List, Optional, Sequence
from urllib.parse import urlsplit

from .segments import Segment, text_segment, markup_segment, merge_text
from .theme import FormattingTheme


SAFE_LINK_SCHEMES = frozenset({"http", "https", "mailto", "tel"})

# Characters that usually close a sentence rather than a URL
URL_TRAILING_PUNCTUATION = ".,;:!?)]"


def anchor_markup(url: str, label: str, theme: FormattingTheme) -> str:
    """Build an anchor that opens in a new tab."""
    return (
        f'<a href="{html.escape(url, quote=True)}" target="{theme.link_target}" '
        f'rel="noopener noreferrer" style="{theme.link_style}">'
        f'{html.escape(label, quote=False)}</a>'
    )


def is_safe_url(url: str) -> bool:
    """Only allow link schemes that cannot run script."""
    try:
        scheme = urlsplit(url).scheme.lower()
    except ValueError:
        return False
    return scheme in SAFE_LINK_SCHEMES


def has_host(url: str) -> bool:
    try:
        return bool(urlsplit(url).netloc)
    except ValueError:
        return False


def _free_placeholder(run: Sequence[Segment]) -> str:
    # First private-use character absent from the run's text
    text = "".join(segment.content for segment in run if not segment.is_markup)
    code_point = 0xE000
    while chr(code_point) in text:
        code_point += 1
    return chr(code_point)


class RewriteRule:
    """
    Base class for a single regex-driven rewrite.

    Subclasses set `pattern` and implement `replace()`, returning the
    segments that stand in for one match, or None to keep the match as
    literal text.
    """

    name = "rule"
    pattern: re.Pattern = None
    # Match across complete inline elements (anchors) between text
    spans_inline_elements = False

    def apply(self, segments: Sequence[Segment], theme: FormattingTheme) -> List[Segment]:
        result: List[Segment] = []
        run: List[Segment] = []
        for segment in segments:
            if not segment.is_markup or (self.spans_inline_elements and segment.inline_element):
                run.append(segment)
                continue
            self._rewrite_run(run, theme, result)
            run = []
            result.append(segment)
        self._rewrite_run(run, theme, result)
        return merge_text(result)

    def _rewrite_run(self, run: List[Segment], theme: FormattingTheme, result: List[Segment]):
        """Rewrite one run of text, standing each inline element in for a placeholder character."""
        if not run:
            return
        at_line_start = not result or (result[-1].is_markup and result[-1].breaks_line)
        elements = [segment for segment in run if segment.is_markup]
        if not elements:
            result.extend(self.rewrite("".join(s.content for s in run), theme, at_line_start))
            return

        placeholder = _free_placeholder(run)
        content = "".join(placeholder if s.is_markup else s.content for s in run)
        remaining = iter(elements)
        for piece in self.rewrite(content, theme, at_line_start):
            if piece.is_markup:
                result.append(piece)
                continue
            parts = piece.content.split(placeholder)
            result.append(text_segment(parts[0]))
            for part in parts[1:]:
                result.append(next(remaining))
                result.append(text_segment(part))

    def rewrite(self, content: str, theme: FormattingTheme, at_line_start: bool) -> List[Segment]:
        pieces: List[Segment] = []
        cursor = 0
        for match in self.pattern.finditer(content):
            if not self.accepts(match, at_line_start):
                continue
            pieces.append(text_segment(content[cursor:match.start()]))
            replacement = self.replace(match, theme)
            if replacement is None:
                pieces.append(text_segment(match.group(0)))
            else:
                pieces.extend(replacement)
            cursor = match.end()
        pieces.append(text_segment(content[cursor:]))
        return pieces

    def accepts(self, match: re.Match, at_line_start: bool) -> bool:
        return True

    def replace(self, match: re.Match, theme: FormattingTheme) -> Optional[List[Segment]]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class BracketLinkRule(RewriteRule):
    """[label](url) -> anchor. Label and URL are consumed together."""

    name = "bracket_link"
    pattern = re.compile(r"\[([^\[\]\n]+)\]\(([^()\s]+)\)")

    def replace(self, match, theme):
        label, url = match.group(1), match.group(2)
        if not is_safe_url(url):
            # Degrade to the visible label
            return [text_segment(label)]
        return [markup_segment(anchor_markup(url, label, theme), inline_element=True)]


class LineBreakRule(RewriteRule):
    """Paragraph breaks become <br><br>, single newlines <br>."""

    name = "line_break"
    pattern = re.compile(r"\n\n|\n")

    def replace(self, match, theme):
        if match.group(0) == "\n\n":
            return [markup_segment("<br><br>", breaks_line=True)]
        return [markup_segment("<br>", breaks_line=True)]


class SectionHeadingRule(RewriteRule):
    """【heading】 -> block heading. Inner text stays open to later rules."""

    name = "section_heading"
    pattern = re.compile(r"【([^】]+)】")
    spans_inline_elements = True

    def replace(self, match, theme):
        return [
            markup_segment(f'<strong style="{theme.heading_style}">【'),
            text_segment(match.group(1)),
            markup_segment("】</strong>", breaks_line=True),
        ]


class HorizontalRuleRule(RewriteRule):
    """--- -> divider."""

    name = "horizontal_rule"
    pattern = re.compile(r"---")

    def replace(self, match, theme):
        return [markup_segment(f'<hr style="{theme.divider_style}">', breaks_line=True)]


class BulletRule(RewriteRule):
    """
    "- " -> bullet glyph, only where a line starts.

    Leading spaces and tabs are kept. A "- " in the middle of a line is
    ordinary text (e.g. "9 - 5").
    """

    name = "bullet"
    pattern = re.compile(r"^([ \t]*)- ")

    def accepts(self, match, at_line_start):
        return at_line_start

    def replace(self, match, theme):
        return [text_segment(f"{match.group(1)}{theme.bullet_glyph} ")]


class BoldRule(RewriteRule):
    """**text** -> strong. Non-greedy, no nesting."""

    name = "bold"
    pattern = re.compile(r"\*\*(.+?)\*\*")
    spans_inline_elements = True

    def replace(self, match, theme):
        return [
            markup_segment(f'<strong style="{theme.bold_style}">'),
            text_segment(match.group(1)),
            markup_segment("</strong>"),
        ]


class AutolinkRule(RewriteRule):
    """
    Bare http(s) URLs -> anchor.

    Anchors built by BracketLinkRule are markup segments, so a URL that
    was already linked is never seen here.
    """

    name = "autolink"
    pattern = re.compile(r"https?://[^\s<>\"']+")

    def replace(self, match, theme):
        candidate = match.group(0)
        url = candidate.rstrip(URL_TRAILING_PUNCTUATION)
        if not has_host(url):
            return None
        trailing = candidate[len(url):]
        return [markup_segment(anchor_markup(url, url, theme), inline_element=True), text_segment(trailing)]


DEFAULT_RULES = (
    BracketLinkRule(),
    LineBreakRule(),
    SectionHeadingRule(),
    HorizontalRuleRule(),
    BulletRule(),
    BoldRule(),
    AutolinkRule(),
)
