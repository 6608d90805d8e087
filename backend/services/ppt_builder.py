from io import BytesIO
from typing import List, Optional
from pptx import Presentation
from pptx.util import Pt, Inches
from pptx.enum.text import PP_ALIGN, MSO_ANCHOR, MSO_AUTO_SIZE
from pptx.enum.shapes import MSO_SHAPE
from services.slide_schema import Deck, Slide, SlideKind
from services.brand_schema import BrandConfig
from services.theme_manager import ThemeManager
from core.logger import get_logger

logger = get_logger("ppt_builder")

# 16:9 canvas
SLIDE_WIDTH = Inches(10)
SLIDE_HEIGHT = Inches(5.625)

TITLE_SLIDE_LAYOUT = 0
TITLE_AND_CONTENT_LAYOUT = 1
TITLE_ONLY_LAYOUT = 5

MAX_BULLETS_PER_SLIDE = 9

def style_paragraph(paragraph, font_name: str, size: int, color, bold: bool = False, italic: bool = False):
    paragraph.font.name = font_name
    paragraph.font.size = Pt(size)
    paragraph.font.color.rgb = color
    paragraph.font.bold = bold
    paragraph.font.italic = italic

# --- Plugin-style layout system ---
class BaseLayout:
    layout_index = TITLE_AND_CONTENT_LAYOUT
    placeholder_title = "Content"

    def __init__(self, theme: dict):
        self.theme = theme

    def render(self, slide_data: Slide, pptx_slide):
        raise NotImplementedError

    def slide_title(self, slide_data: Slide) -> str:
        return slide_data.title or self.placeholder_title

    def format_title(self, title_shape, text: str):
        """Brand-colored title with adaptive sizing based on title length"""
        title_shape.text = text
        text_frame = title_shape.text_frame
        text_frame.word_wrap = True
        text_frame.auto_size = MSO_AUTO_SIZE.TEXT_TO_FIT_SHAPE

        base_size = self.theme["heading_size"]
        if len(text) > 80:
            font_size = base_size - 6
        elif len(text) > 50:
            font_size = base_size - 4
        else:
            font_size = base_size

        paragraph = text_frame.paragraphs[0]
        style_paragraph(paragraph, self.theme["title_font"], font_size,
                        self.theme["primary"], bold=self.theme["title_bold"])
        paragraph.alignment = PP_ALIGN.LEFT

    def add_brand_frame(self, pptx_slide):
        """Top rule in the primary color and an accent footer band"""
        rule = pptx_slide.shapes.add_shape(MSO_SHAPE.RECTANGLE, Inches(0.5), Inches(0.3), Inches(9), Pt(3))
        rule.fill.solid()
        rule.fill.fore_color.rgb = self.theme["primary"]
        rule.line.fill.background()

        footer = pptx_slide.shapes.add_shape(MSO_SHAPE.RECTANGLE, 0, SLIDE_HEIGHT - Inches(0.3), SLIDE_WIDTH, Inches(0.3))
        footer.fill.solid()
        footer.fill.fore_color.rgb = self.theme["accent"]
        footer.line.fill.background()

    def body_frame(self, pptx_slide):
        """Text frame of the content placeholder, or a new textbox when the layout has none"""
        if len(pptx_slide.placeholders) > 1:
            shape = pptx_slide.placeholders[1]
            shape.left, shape.top = Inches(0.5), Inches(1.4)
            shape.width, shape.height = Inches(9), Inches(3.6)
        else:
            shape = pptx_slide.shapes.add_textbox(Inches(0.5), Inches(1.4), Inches(9), Inches(3.6))
        text_frame = shape.text_frame
        text_frame.clear()
        text_frame.word_wrap = True
        text_frame.auto_size = MSO_AUTO_SIZE.TEXT_TO_FIT_SHAPE
        text_frame.margin_left = Pt(12)
        text_frame.margin_right = Pt(12)
        text_frame.vertical_anchor = MSO_ANCHOR.TOP
        return text_frame

class TitleLayout(BaseLayout):
    layout_index = TITLE_SLIDE_LAYOUT
    placeholder_title = "Main Title"
    title_scale = 1.0

    def render(self, slide_data: Slide, pptx_slide):
        background = pptx_slide.background.fill
        background.solid()
        background.fore_color.rgb = self.theme["primary"]

        band = pptx_slide.shapes.add_shape(MSO_SHAPE.RECTANGLE, 0, 0, SLIDE_WIDTH, Inches(0.9))
        band.fill.solid()
        band.fill.fore_color.rgb = self.theme["accent"]
        band.line.fill.background()

        title_shape = pptx_slide.shapes.title
        title_shape.text = self.slide_title(slide_data)
        title_paragraph = title_shape.text_frame.paragraphs[0]
        style_paragraph(title_paragraph, self.theme["title_font"],
                        int(self.theme["title_size"] * self.title_scale),
                        self.theme["background"], bold=self.theme["title_bold"])
        title_paragraph.alignment = PP_ALIGN.CENTER

        subtitle_text = slide_data.subtitle or slide_data.description or slide_data.body
        if len(pptx_slide.placeholders) > 1:
            subtitle = pptx_slide.placeholders[1]
            subtitle.text = subtitle_text or ""
            if subtitle_text:
                subtitle_paragraph = subtitle.text_frame.paragraphs[0]
                style_paragraph(subtitle_paragraph, self.theme["subtitle_font"],
                                self.theme["subtitle_size"], self.theme["background"])
                subtitle_paragraph.alignment = PP_ALIGN.CENTER

class SectionLayout(TitleLayout):
    placeholder_title = "New Section"
    title_scale = 0.9

class ContentLayout(BaseLayout):
    placeholder_title = "Content"

    def render(self, slide_data: Slide, pptx_slide):
        self.add_brand_frame(pptx_slide)
        self.format_title(pptx_slide.shapes.title, self.slide_title(slide_data))
        if slide_data.body:
            text_frame = self.body_frame(pptx_slide)
            self.add_paragraphs(text_frame, split_into_paragraphs(slide_data.body))

    def add_paragraphs(self, text_frame, paragraphs: List[str]):
        for i, para_text in enumerate(paragraphs):
            p = text_frame.paragraphs[0] if i == 0 else text_frame.add_paragraph()
            p.text = para_text
            style_paragraph(p, self.theme["body_font"], self.theme["body_size"], self.theme["text"])
            p.alignment = PP_ALIGN.LEFT
            p.space_after = Pt(8)

class BulletsLayout(ContentLayout):
    placeholder_title = "Key Points"

    def render(self, slide_data: Slide, pptx_slide):
        self.add_brand_frame(pptx_slide)
        self.format_title(pptx_slide.shapes.title, self.slide_title(slide_data))
        text_frame = self.body_frame(pptx_slide)

        first = True
        if slide_data.body:
            p = text_frame.paragraphs[0]
            p.text = slide_data.body.replace("\n", " ")
            style_paragraph(p, self.theme["body_font"], self.theme["body_size"],
                            self.theme["text"], italic=True)
            first = False

        for bullet in slide_data.bullets:
            p = text_frame.paragraphs[0] if first else text_frame.add_paragraph()
            first = False
            p.text = truncate(bullet, 220)
            p.level = 0
            style_paragraph(p, self.theme["body_font"], self.theme["body_size"], self.theme["text"])
            p.space_before = Pt(3)
            p.space_after = Pt(6)

class ImageLayout(BaseLayout):
    layout_index = TITLE_ONLY_LAYOUT
    placeholder_title = "Image"

    def render(self, slide_data: Slide, pptx_slide):
        self.add_brand_frame(pptx_slide)
        self.format_title(pptx_slide.shapes.title, self.slide_title(slide_data))

        # Image frame; the picture itself is added by the editor
        frame = pptx_slide.shapes.add_shape(MSO_SHAPE.RECTANGLE, Inches(2), Inches(1.4), Inches(6), Inches(3))
        frame.fill.solid()
        frame.fill.fore_color.rgb = self.theme["secondary"]
        frame.line.color.rgb = self.theme["primary"]
        frame.line.width = Pt(2)
        frame.text_frame.text = "Image here"
        frame.text_frame.vertical_anchor = MSO_ANCHOR.MIDDLE
        label = frame.text_frame.paragraphs[0]
        style_paragraph(label, self.theme["body_font"], 14, self.theme["text"])
        label.alignment = PP_ALIGN.CENTER

        caption_text = slide_data.description or slide_data.body
        if caption_text:
            caption = pptx_slide.shapes.add_textbox(Inches(0.5), Inches(4.5), Inches(9), Inches(0.6))
            caption.text_frame.text = caption_text
            caption_paragraph = caption.text_frame.paragraphs[0]
            style_paragraph(caption_paragraph, self.theme["body_font"], 12, self.theme["text"])
            caption_paragraph.alignment = PP_ALIGN.CENTER

# Layout registry
LAYOUT_REGISTRY = {
    SlideKind.TITLE: TitleLayout,
    SlideKind.SECTION: SectionLayout,
    SlideKind.CONTENT: ContentLayout,
    SlideKind.BULLETS: BulletsLayout,
    SlideKind.IMAGE: ImageLayout,
}

def get_layout(slide_data: Slide):
    return LAYOUT_REGISTRY.get(slide_data.kind, ContentLayout)

def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."

def split_into_paragraphs(text: str, max_length: int = 300) -> List[str]:
    """Group body lines into readable paragraphs of at most max_length characters"""
    paragraphs = []
    current_para = ""
    for line in text.split("\n"):
        line = line.strip()
        if not line:
            continue
        if current_para and len(current_para) + len(line) > max_length:
            paragraphs.append(current_para)
            current_para = line
        else:
            current_para = f"{current_para} {line}" if current_para else line
    if current_para:
        paragraphs.append(current_para)
    return paragraphs

class PPTBuilder:
    def __init__(self, brand_config: Optional[BrandConfig] = None):
        self.brand_config = brand_config
        self.theme = ThemeManager.get_theme_colors(brand_config)

    def build(self, deck: Deck) -> BytesIO:
        try:
            logger.info(f"Building PPTX for '{deck.title}' with {deck.slide_count} slides")
            processed_deck = self._preprocess_slides_for_overflow(deck)

            prs = Presentation()
            prs.slide_width = SLIDE_WIDTH
            prs.slide_height = SLIDE_HEIGHT
            self._set_document_properties(prs, deck)

            for i, slide_data in enumerate(processed_deck.slides):
                logger.debug(f"Processing slide {i+1}: {slide_data.title} (kind: {slide_data.kind.value})")
                self._create_slide(prs, slide_data)

            pptx_stream = BytesIO()
            prs.save(pptx_stream)
            pptx_stream.seek(0)
            logger.info(f"PPTX generated in memory ({len(processed_deck.slides)} slides)")
            return pptx_stream
        except Exception as e:
            logger.error(f"Failed to build PPTX: {e}")
            raise

    def _set_document_properties(self, prs, deck: Deck):
        brand_name = self.brand_config.brand_name if self.brand_config and self.brand_config.brand_name else "Custom brand"
        prs.core_properties.author = "Brand-to-Deck AI"
        prs.core_properties.title = deck.title
        prs.core_properties.subject = f"Generated for {brand_name}"

    def _create_slide(self, prs, slide_data: Slide):
        layout = get_layout(slide_data)(self.theme)
        pptx_slide = prs.slides.add_slide(prs.slide_layouts[layout.layout_index])
        layout.render(slide_data, pptx_slide)
        return pptx_slide

    def _preprocess_slides_for_overflow(self, deck: Deck) -> Deck:
        """Split bullet slides that would overflow into '(continued)' slides"""
        new_slides = []
        for slide in deck.slides:
            if len(slide.bullets) <= MAX_BULLETS_PER_SLIDE:
                new_slides.append(slide)
                continue

            logger.info(f"Splitting content-heavy slide: {slide.title} ({len(slide.bullets)} bullets)")
            chunks = [slide.bullets[i:i + MAX_BULLETS_PER_SLIDE]
                      for i in range(0, len(slide.bullets), MAX_BULLETS_PER_SLIDE)]
            for index, chunk in enumerate(chunks):
                new_slides.append(slide.model_copy(update={
                    "title": slide.title if index == 0 else f"{slide.title} (continued)",
                    "body": slide.body if index == 0 else "",
                    "bullets": chunk,
                }))

        return deck.model_copy(update={"slides": new_slides})
