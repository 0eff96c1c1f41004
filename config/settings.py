#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management
"""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings

from .constants import (
    DEFAULT_API_BASE_URL,
    REQUEST_TIMEOUT_SECONDS,
    CAPTURE_BACKGROUND_COLOR,
    CAPTURE_SCALE,
    CAPTURE_VIEWPORT_WIDTH,
    DEFAULT_PAGE_SIZE,
    QR_WIDTH,
    QR_MARGIN,
    QR_DARK_COLOR,
    QR_LIGHT_COLOR,
    QR_ERROR_CORRECTION,
)


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings"""

    # ========== Remote Service ==========
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout: float = REQUEST_TIMEOUT_SECONDS

    # ========== Capture ==========
    capture_background_color: str = CAPTURE_BACKGROUND_COLOR
    capture_scale: float = CAPTURE_SCALE  # output pixels per CSS pixel
    capture_fixed_width: Optional[int] = None  # pin region width (CSS px)
    capture_viewport_width: int = CAPTURE_VIEWPORT_WIDTH

    # ========== Export ==========
    export_variant: str = "image"  # image | document
    page_size: str = DEFAULT_PAGE_SIZE  # A4 | LETTER

    # ========== QR Code ==========
    qr_width: int = QR_WIDTH
    qr_margin: int = QR_MARGIN
    qr_dark_color: str = QR_DARK_COLOR
    qr_light_color: str = QR_LIGHT_COLOR
    qr_error_correction: str = QR_ERROR_CORRECTION  # L | M | Q | H

    class Config:
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Allow extra fields from .env that aren't defined in model

    def get_capture_options(self):
        """Build capture options from the capture settings"""
        from cardlens.export.capture import CaptureOptions

        return CaptureOptions(
            background_color=self.capture_background_color,
            scale=self.capture_scale,
            fixed_width=self.capture_fixed_width,
            viewport_width=self.capture_viewport_width,
        )

    def get_code_options(self):
        """Build QR code options from the QR settings"""
        from cardlens.export.qr_encoder import CodeOptions

        return CodeOptions(
            width=self.qr_width,
            margin=self.qr_margin,
            dark_color=self.qr_dark_color,
            light_color=self.qr_light_color,
            error_correction=self.qr_error_correction,
        )

    def describe(self) -> str:
        """One-line configuration summary for logs"""
        return (
            f"api={self.api_base_url}, timeout={self.request_timeout}s, "
            f"variant={self.export_variant}, page={self.page_size}, "
            f"scale={self.capture_scale}, qr={self.qr_width}px/{self.qr_error_correction}"
        )


# Global settings instance
settings = Settings()
