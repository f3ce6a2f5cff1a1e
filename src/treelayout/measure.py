"""Label metrics backed by Pillow fonts."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple

from PIL import ImageFont

DEFAULT_FONT_FAMILY = "sans-serif"
GENERIC_FONT_FILES = {
    "sans-serif": ["DejaVuSans.ttf", "Arial.ttf", "Helvetica.ttc", "LiberationSans-Regular.ttf"],
    "serif": ["DejaVuSerif.ttf", "Times New Roman.ttf", "LiberationSerif-Regular.ttf"],
    "monospace": ["DejaVuSansMono.ttf", "Courier New.ttf", "LiberationMono-Regular.ttf"],
}
BOLD_SUFFIXES = {"DejaVuSans.ttf": "DejaVuSans-Bold.ttf", "Arial.ttf": "Arial Bold.ttf"}


class TextMeasurer:
    """Caches Pillow fonts per (family, size, weight) and measures labels."""

    FONT_DIRS = [
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        Path("/System/Library/Fonts"),
        Path("/Library/Fonts"),
        Path("C:/Windows/Fonts"),
    ]
    # File name -> resolved path, shared by every measurer.
    _PATHS: Dict[str, Optional[str]] = {}

    def __init__(self, family: str = DEFAULT_FONT_FAMILY) -> None:
        self.family = family
        self._font_cache: Dict[Tuple[int, bool], ImageFont.ImageFont] = {}

    def font(self, size: float, bold: bool = False):
        key = (max(1, int(round(size))), bold)
        if key in self._font_cache:
            return self._font_cache[key]
        font = None
        for candidate in self._candidates(bold):
            try:
                font = ImageFont.truetype(candidate, key[0])
                break
            except OSError:
                continue
        if font is None:
            font = ImageFont.load_default(key[0])
        self._font_cache[key] = font
        return font

    def measure(self, text: str, size: float, bold: bool = False) -> float:
        if not text:
            return 0.0
        return float(self.font(size, bold).getlength(text))

    def _candidates(self, bold: bool) -> List[str]:
        names = GENERIC_FONT_FILES.get(self.family.lower(), [self.family])
        if bold:
            names = [BOLD_SUFFIXES.get(name, name) for name in names] + names
        found: List[str] = []
        for name in names:
            resolved = self._locate(name)
            if resolved:
                found.append(resolved)
        # Let FreeType try its own search path last.
        found.extend(names)
        return found

    def _locate(self, file_name: str) -> Optional[str]:
        if file_name in TextMeasurer._PATHS:
            return TextMeasurer._PATHS[file_name]
        resolved: Optional[str] = None
        for directory in self.FONT_DIRS:
            if not directory.exists():
                continue
            try:
                match = min(directory.rglob(file_name), default=None)
            except OSError:
                continue
            if match is not None:
                resolved = str(match)
                break
        TextMeasurer._PATHS[file_name] = resolved
        return resolved


_SHARED: Dict[str, TextMeasurer] = {}


def shared_measurer(family: str = DEFAULT_FONT_FAMILY) -> TextMeasurer:
    measurer = _SHARED.get(family)
    if measurer is None:
        measurer = _SHARED[family] = TextMeasurer(family)
    return measurer


__all__ = ["TextMeasurer", "DEFAULT_FONT_FAMILY", "shared_measurer"]
