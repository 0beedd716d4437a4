"""
Module: fonts.defaults

Purpose:
    Find a default CJK font when the user has not picked one.

Search order:
    1. COPYBOOK_DEFAULT_FONT environment variable
    2. Font bundled with the package (fonts/data/default.ttf)
    3. Well-known system CJK font files

Key Functions:
    - find_default_font(): Path of the first available font
    - resolve_default_font(): Bytes of that font, or None

Used By:
    - export.controller: FONT_READY stage fallback
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Iterator, List, Optional

logger = logging.getLogger(__name__)

ENV_DEFAULT_FONT = "COPYBOOK_DEFAULT_FONT"

BUNDLED_FONT = Path(__file__).resolve().parent / "data" / "default.ttf"

SYSTEM_FONT_DIRS = {
    "win32": ["C:/Windows/Fonts", os.path.expandvars("%WINDIR%/Fonts")],
    "linux": ["/usr/share/fonts", "/usr/local/share/fonts", "~/.fonts", "~/.local/share/fonts"],
    "darwin": ["/Library/Fonts", "/System/Library/Fonts", "~/Library/Fonts"],
}

# TrueType-outline CJK fonts first; PDF embedding needs glyf outlines
SYSTEM_CJK_FONTS = [
    "simsun.ttc",
    "simkai.ttf",
    "msyh.ttc",
    "msjh.ttc",
    "mingliu.ttc",
    "Songti.ttc",
    "STHeiti Light.ttc",
    "Hiragino Sans GB.ttc",
    "wqy-microhei.ttc",
    "wqy-zenhei.ttc",
    "uming.ttc",
    "ukai.ttc",
    "DroidSansFallbackFull.ttf",
    "Droid Sans Fallback.ttf",
]


def _system_font_dirs() -> List[Path]:
    key = "linux" if sys.platform.startswith("linux") else sys.platform
    return [Path(os.path.expanduser(d)) for d in SYSTEM_FONT_DIRS.get(key, [])]


def _candidates() -> Iterator[Path]:
    env_path = os.environ.get(ENV_DEFAULT_FONT)
    if env_path:
        yield Path(env_path).expanduser()
    yield BUNDLED_FONT
    for directory in _system_font_dirs():
        if not directory.is_dir():
            continue
        for name in SYSTEM_CJK_FONTS:
            direct = directory / name
            if direct.is_file():
                yield direct
            else:
                # Linux distributions nest fonts one or two levels deep
                yield from directory.glob(f"*/{name}")
                yield from directory.glob(f"*/*/{name}")


def find_default_font() -> Optional[Path]:
    """Path of the first available default font, or None."""
    for candidate in _candidates():
        if candidate.is_file():
            logger.debug(f"Default font candidate found: {candidate}")
            return candidate
    return None


def resolve_default_font() -> Optional[bytes]:
    """
    Bytes of the default font.

    Returns:
        Font bytes, or None if no default font is installed
    """
    path = find_default_font()
    if path is None:
        logger.warning("No default font found (bundled or system)")
        return None
    try:
        data = path.read_bytes()
    except OSError as e:
        logger.warning(f"Default font {path} unreadable: {e}")
        return None
    logger.info(f"Using default font {path.name} ({len(data) / 1024 / 1024:.1f} MB)")
    return data
