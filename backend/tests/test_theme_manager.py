from pptx.dml.color import RGBColor
from services.theme_manager import ThemeManager
from services.brand_schema import BrandConfig

def test_defaults_without_brand():
    theme = ThemeManager.get_theme_colors()
    assert theme["primary"] == RGBColor(0x00, 0x66, 0xCC)
    assert theme["title_font"] == "Arial"

def test_brand_colors_and_fonts_override_defaults():
    brand = BrandConfig.model_validate({
        "brand_name": "Acme",
        "colors": [
            {"name": "Navy", "type": "primary", "hex": "#112233"},
            {"name": "Coral", "type": "accent", "hex": "f80"},
        ],
        "typography": [
            {"element": "title", "font_family": "Montserrat", "font_style": "Light", "size": "40pt"},
            {"element": "paragraph", "font_family": "Lato", "size": "14"},
        ],
    })
    theme = ThemeManager.get_theme_colors(brand)
    assert theme["primary"] == RGBColor(0x11, 0x22, 0x33)
    assert theme["accent"] == RGBColor(0xFF, 0x88, 0x00)
    assert theme["background"] == ThemeManager.DEFAULT_THEME["background"]
    assert theme["title_font"] == "Montserrat"
    assert theme["title_size"] == 40
    assert theme["title_bold"] is False
    assert theme["body_font"] == "Lato"
    assert theme["body_size"] == 14

def test_invalid_hex_keeps_default():
    brand = BrandConfig(colors=[{"type": "primary", "hex": "blue"}])
    theme = ThemeManager.get_theme_colors(brand)
    assert theme["primary"] == ThemeManager.DEFAULT_THEME["primary"]

def test_hex_and_size_parsing():
    assert ThemeManager.hex_to_rgb("#ABCDEF") == RGBColor(0xAB, 0xCD, 0xEF)
    assert ThemeManager.hex_to_rgb("") is None
    assert ThemeManager.hex_to_rgb("#12345") is None
    assert ThemeManager.parse_size("24 px") == 24
    assert ThemeManager.parse_size("large") is None
