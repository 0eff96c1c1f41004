"""
Inline styles applied to the markup produced by the formatting engine.

Defaults reproduce the dark result panel palette: red accents for links
and bold text, blue section headings.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FormattingTheme:
    """Inline CSS for each generated element."""
    link_style: str = "color: #ef4444; text-decoration: underline; font-weight: 500;"
    heading_style: str = (
        "color: #3b82f6; font-size: 16px; display: block; margin: 12px 0 6px 0; "
        "padding: 6px 12px; background: rgba(59, 130, 246, 0.1); "
        "border-left: 3px solid #ef4444; border-radius: 4px;"
    )
    divider_style: str = "border: none; height: 1px; background: rgba(156, 163, 175, 0.3); margin: 16px 0;"
    bold_style: str = "color: #ef4444; font-weight: 600;"
    bullet_glyph: str = "•"
    link_target: str = "_blank"


DEFAULT_THEME = FormattingTheme()
