#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Quick Analysis Script - analyze a card image and export the result.

Usage:
    python quick_analyze.py card.jpg
    python quick_analyze.py card.jpg --export document --qr-out qr.png --html-out result.html
"""

import argparse
import asyncio
import mimetypes
import sys
from pathlib import Path

from config.logging_config import get_logger
from config.settings import settings

from cardlens.export.errors import ExportError
from cardlens.session import AnalysisSession

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Analyze a business card image and share the result via QR code"
    )
    parser.add_argument("image", type=Path, help="Image file to analyze (JPG, PNG, GIF)")
    parser.add_argument(
        "--export",
        choices=["image", "document", "none"],
        default=settings.export_variant,
        help="Artifact to export (default: %(default)s)",
    )
    parser.add_argument("--qr-out", type=Path, default=Path("qr.png"), help="Where to write the QR code PNG")
    parser.add_argument("--html-out", type=Path, help="Also write the formatted result as HTML")
    return parser


async def run(args: argparse.Namespace) -> int:
    if not args.image.exists():
        print(f"❌ File not found: {args.image}")
        return 1

    content_type = mimetypes.guess_type(args.image.name)[0] or "application/octet-stream"
    session = AnalysisSession.from_settings()

    print(f"🔍 Analyzing {args.image.name}...")
    result = await session.analyze(args.image.read_bytes(), args.image.name, content_type)
    print("\n" + result.text + "\n")

    if args.html_out:
        args.html_out.write_text(session.formatted_markup, encoding="utf-8")
        print(f"📄 Formatted result: {args.html_out}")

    if args.export == "none":
        return 0 if result.succeeded else 1

    try:
        state = await session.export(args.export)
    except ExportError as e:
        print(f"❌ {e}")
        return 1

    if not state.succeeded:
        print(f"❌ Export {state.describe()}")
        return 1

    args.qr_out.write_bytes(state.retrieval_code.code_image)
    print(f"✅ Download URL: {state.retrieval_code.download_url}")
    print(f"📱 QR code: {args.qr_out}")
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
