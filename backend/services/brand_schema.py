import re
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field

HEX_COLOR_RE = re.compile(r"^#?(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

class LogoVariant(BaseModel):
    name: str = ""
    description: str = ""

class Logo(BaseModel):
    type: str = "principal"
    description: str = ""
    variants: List[LogoVariant] = []
    protection_area: str = ""
    min_size: str = ""

class BrandColor(BaseModel):
    name: str = ""
    type: str = Field("primary", description="primary, accent, secondary, background or text")
    hex: str = ""
    rgb: str = ""
    cmyk: str = ""
    usage_rules: str = ""

class Typography(BaseModel):
    element: str = Field("title", description="title, subtitle, paragraph, highlight or volanta")
    font_family: str = ""
    font_style: str = ""
    case: str = ""
    size: str = ""
    line_height: str = ""
    usage_rules: str = ""

class GraphicResource(BaseModel):
    type: str = Field("miscellany", description="miscellany, plane, diagonal or texture")
    description: str = ""
    examples: List[str] = []

class IncorrectUse(BaseModel):
    description: str = ""
    example_image_description: str = ""

class BrandConfig(BaseModel):
    """Style descriptor extracted from a brand manual"""
    model_config = ConfigDict(extra="ignore")

    brand_name: str = ""
    logos: List[Logo] = []
    colors: List[BrandColor] = []
    typography: List[Typography] = []
    graphic_resources: List[GraphicResource] = []
    incorrect_uses: List[IncorrectUse] = []

    def color_for(self, role: str) -> Optional[BrandColor]:
        return next((c for c in self.colors if c.type == role and c.hex), None)

    def font_for(self, element: str) -> Optional[Typography]:
        return next((t for t in self.typography if t.element == element and t.font_family), None)

class BrandValidation(BaseModel):
    is_valid: bool
    errors: List[str] = []
    warnings: List[str] = []

def validate_brand_config(data: Dict[str, Any]) -> BrandValidation:
    """Check that a brand config carries what the renderer needs"""
    errors = []
    warnings = []

    if not data.get("brand_name"):
        errors.append("Brand name is required")
    colors = data.get("colors") or []
    if not isinstance(colors, list):
        errors.append("'colors' must be a list")
        colors = []
    elif not colors:
        errors.append("At least one color is required")
    if not data.get("typography"):
        errors.append("At least one typography entry is required")

    for index, color in enumerate(colors):
        if not isinstance(color, dict):
            errors.append(f"Color entry {index + 1} must be an object with a hex code")
            continue
        hex_value = color.get("hex") or ""
        if not isinstance(hex_value, str) or (hex_value and not HEX_COLOR_RE.match(hex_value.strip())):
            warnings.append(f"Color '{color.get('name') or hex_value}' has an invalid hex code: {hex_value}")
    if colors and not any(isinstance(c, dict) and c.get("type") == "primary" for c in colors):
        warnings.append("No primary color defined, the default will be used")

    return BrandValidation(is_valid=not errors, errors=errors, warnings=warnings)

BRAND_PRESETS: List[Dict[str, Any]] = [
    {
        "id": "corporate",
        "name": "Corporate",
        "description": "Template for corporate companies",
        "colors": [
            {"name": "Primary", "hex": "#2c3e50", "type": "primary"},
            {"name": "Accent", "hex": "#3498db", "type": "accent"},
        ],
        "typography": [
            {"element": "title", "font_family": "Arial", "font_style": "Bold"},
        ],
    },
    {
        "id": "modern",
        "name": "Modern",
        "description": "Minimalist modern design",
        "colors": [
            {"name": "Primary", "hex": "#1a1a1a", "type": "primary"},
            {"name": "Accent", "hex": "#ff6b6b", "type": "accent"},
        ],
        "typography": [
            {"element": "title", "font_family": "Helvetica", "font_style": "Light"},
        ],
    },
]
