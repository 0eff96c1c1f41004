"""
Standalone HTML page used to render formatted analysis markup for capture.

The result panel mirrors the on-screen result area: dark panel, Inter
font, 14px text with 1.6 line height.
"""

from string import Template
from typing import Optional

from config.constants import CAPTURE_REGION_ID


PAGE_TEMPLATE = Template("""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<style>
  html, body {
    margin: 0;
    padding: 0;
    background: $background;
  }
  #$region_id {
    padding: 20px;
    border: 1px solid #374151;
    border-radius: 6px;
    background-color: #111827;
    min-height: 200px;
    font-family: 'Inter', system-ui, sans-serif;
    font-size: 14px;
    line-height: 1.6;
    color: #f9fafb;
    white-space: pre-wrap;
    word-wrap: break-word;
    overflow-wrap: break-word;
    box-sizing: border-box;
    width: $width;
  }
</style>
</head>
<body>
<div id="$region_id"><div>$markup</div></div>
</body>
</html>
""")


def render_capture_page(
    markup: str,
    background_color: str,
    fixed_width: Optional[int] = None,
    region_id: str = CAPTURE_REGION_ID,
) -> str:
    """
    Wrap formatted markup in a full HTML document.

    Args:
        markup: Output of the formatting engine.
        background_color: Page background behind the result panel.
        fixed_width: Pin the panel to this many CSS pixels; full width if None.
        region_id: id of the element to capture.
    """
    width = f"{int(fixed_width)}px" if fixed_width else "100%"
    return PAGE_TEMPLATE.substitute(
        background=background_color,
        region_id=region_id,
        width=width,
        markup=markup,
    )
