# gui_components/icon_loader.py
# -*- coding: utf-8 -*-
"""
Turns catalog icon references into QIcons for the game list.

Embedded data: URIs are decoded and resized with Pillow. Remote URLs are
never downloaded; they get the generic placeholder icon.
"""
import io
import base64
import binascii
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError
from PySide6.QtGui import QIcon, QPixmap
from PySide6.QtWidgets import QApplication, QStyle

logger = logging.getLogger(__name__)

# --- Constants ---
DEFAULT_ICON_SIZE = 64  # Size for icons in the game list

# Decoded icons keyed by catalog id
_icon_cache = {}


def decode_data_uri(icon_ref: str) -> Optional[bytes]:
    """Returns the raw bytes of a base64 data: URI, or None if it is not one."""
    if not icon_ref or not icon_ref.startswith("data:"):
        return None
    header, sep, payload = icon_ref.partition(",")
    if not sep or not header.endswith(";base64"):
        return None
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.debug(f"Invalid base64 payload in icon data URI: {e}")
        return None


def _thumbnail_png_bytes(image_bytes: bytes, size: int) -> Optional[bytes]:
    try:
        image = Image.open(io.BytesIO(image_bytes))
        image = image.convert('RGBA')
        image.thumbnail((size, size), Image.Resampling.LANCZOS)
        output = io.BytesIO()
        image.save(output, 'PNG')
        return output.getvalue()
    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.debug(f"PIL could not decode embedded icon: {e}")
        return None


def placeholder_icon() -> QIcon:
    return QApplication.style().standardIcon(QStyle.StandardPixmap.SP_FileIcon)


def get_game_icon(entry, size: int = DEFAULT_ICON_SIZE) -> QIcon:
    """QIcon for a CatalogEntry, cached by entry id."""
    cached = _icon_cache.get(entry.id)
    if cached is not None:
        return cached

    icon = None
    raw = decode_data_uri(entry.icon)
    if raw:
        png_bytes = _thumbnail_png_bytes(raw, size)
        if png_bytes:
            pixmap = QPixmap()
            if pixmap.loadFromData(png_bytes, "PNG"):
                icon = QIcon(pixmap)
    if icon is None:
        icon = placeholder_icon()

    _icon_cache[entry.id] = icon
    return icon


def clear_icon_cache():
    _icon_cache.clear()
