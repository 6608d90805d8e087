import re
from typing import Optional
from pptx.dml.color import RGBColor
from services.brand_schema import BrandConfig, HEX_COLOR_RE
from core.logger import get_logger

logger = get_logger("theme_manager")

class ThemeManager:
    """Resolves a brand config into the colors and fonts used for rendering"""

    DEFAULT_THEME = {
        "primary": RGBColor(0x00, 0x66, 0xCC),     # Blue
        "accent": RGBColor(0xFF, 0x66, 0x00),      # Orange
        "secondary": RGBColor(0xF5, 0xF5, 0xF5),   # Light gray
        "background": RGBColor(0xFF, 0xFF, 0xFF),  # White
        "text": RGBColor(0x33, 0x33, 0x33),        # Dark gray
        "title_font": "Arial",
        "subtitle_font": "Arial",
        "body_font": "Arial",
        "title_size": 36,
        "heading_size": 24,
        "subtitle_size": 18,
        "body_size": 16,
        "title_bold": True,
    }

    COLOR_ROLES = ("primary", "accent", "secondary", "background", "text")

    @staticmethod
    def hex_to_rgb(value: str) -> Optional[RGBColor]:
        """Parse '#RRGGBB', 'RRGGBB' or '#RGB' into an RGBColor"""
        if not value or not HEX_COLOR_RE.match(value.strip()):
            return None
        digits = value.strip().lstrip("#")
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return RGBColor.from_string(digits.upper())

    @staticmethod
    def parse_size(value: str) -> Optional[int]:
        """Leading integer of a size like '36pt' or '24 px'"""
        match = re.match(r"\s*(\d+)", value or "")
        return int(match.group(1)) if match else None

    @staticmethod
    def get_theme_colors(brand_config: Optional[BrandConfig] = None) -> dict:
        """Get the render theme for a brand config, falling back to defaults per role"""
        theme = dict(ThemeManager.DEFAULT_THEME)
        if brand_config is None:
            return theme

        for role in ThemeManager.COLOR_ROLES:
            color = brand_config.color_for(role)
            rgb = ThemeManager.hex_to_rgb(color.hex) if color else None
            if rgb is not None:
                theme[role] = rgb
            elif color:
                logger.warning(f"Ignoring invalid {role} color '{color.hex}' for brand '{brand_config.brand_name}'")

        title_font = brand_config.font_for("title")
        subtitle_font = brand_config.font_for("subtitle")
        body_font = brand_config.font_for("paragraph")
        if title_font:
            theme["title_font"] = title_font.font_family
            theme["title_size"] = ThemeManager.parse_size(title_font.size) or theme["title_size"]
            if title_font.font_style:
                theme["title_bold"] = "bold" in title_font.font_style.lower()
        if subtitle_font:
            theme["subtitle_font"] = subtitle_font.font_family
            theme["subtitle_size"] = ThemeManager.parse_size(subtitle_font.size) or theme["subtitle_size"]
        if body_font:
            theme["body_font"] = body_font.font_family
            theme["body_size"] = ThemeManager.parse_size(body_font.size) or theme["body_size"]

        return theme
