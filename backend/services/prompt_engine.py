from core.config import settings
from core.logger import get_logger
from services.brand_schema import BrandConfig
from pydantic import BaseModel, ValidationError
import json
import time
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_core.prompts import PromptTemplate
from langchain_core.output_parsers import PydanticOutputParser
from langchain_core.exceptions import OutputParserException

logger = get_logger("prompt_engine")

BRAND_PROMPT = (
    "You are an expert graphic designer specialised in corporate identity manuals.\n"
    "Analyse the following brand manual and extract the complete brand configuration so that "
    "PowerPoint presentations can be generated that strictly follow its guidelines.\n"
    "Pay special attention to:\n"
    "1. Logos and their variants (color, grayscale, black and white), protection area and minimum size.\n"
    "2. Color system: name, type (primary, accent, secondary, background, text), HEX, RGB and CMYK codes, usage rules.\n"
    "3. Typography for each text level (title, subtitle, paragraph, highlight, volanta): family, style, case, size, line height.\n"
    "4. Graphic resources (miscellany, planes, diagonals, textures) and how they interact with images.\n"
    "5. Incorrect uses of the logo.\n"
    "Leave a field empty when the manual does not mention it.\n\n"
    "{format_instructions}\n\n"
    "BRAND MANUAL:\n{manual_text}\n"
)

class BrandExtraction(BaseModel):
    brand_config: BrandConfig
    confidence: float

def response_text(response) -> str:
    """Plain text of a chat model response"""
    content = getattr(response, "content", response)
    if isinstance(content, list):
        return "".join(
            part.get("text", "") if isinstance(part, dict) else str(part)
            for part in content
        )
    return str(content)

class PromptEngine:
    def __init__(self, llm=None):
        self.model = settings.gemini_model
        self.temperature = settings.gemini_temperature
        self.max_retries = settings.max_retries
        self.llm = llm or self._create_llm()
        self.parser = PydanticOutputParser(pydantic_object=BrandConfig)
        self.prompt_template = PromptTemplate(
            template=BRAND_PROMPT,
            input_variables=["manual_text"],
            partial_variables={"format_instructions": self.parser.get_format_instructions()},
        )

    def _create_llm(self):
        if not settings.gemini_api_key:
            logger.warning("GEMINI_API_KEY is not set, brand extraction calls will fail")
        return ChatGoogleGenerativeAI(
            model=self.model,
            google_api_key=settings.gemini_api_key,
            temperature=self.temperature,
        )

    def extract_brand_config(self, manual_text: str) -> BrandExtraction:
        """Ask Gemini for the brand configuration described by a manual's text"""
        if not manual_text or not manual_text.strip():
            raise ValueError("The brand manual has no extractable text")

        prompt = self.prompt_template.format(manual_text=manual_text[:settings.max_manual_chars])

        last_error = None
        for attempt in range(1, self.max_retries + 1):
            try:
                logger.info(f"🎨 Calling Gemini for brand extraction (attempt {attempt})")
                response = self.llm.invoke(prompt)
                brand_config = self.parser.parse(response_text(response))
                logger.info(f"Extracted brand '{brand_config.brand_name}' with {len(brand_config.colors)} colors")
                return BrandExtraction(brand_config=brand_config, confidence=0.95)
            except (ValidationError, OutputParserException, json.JSONDecodeError, ValueError) as e:
                logger.error(f"Validation/JSON error: {e}")
                last_error = e
            except Exception as e:
                logger.error(f"LLM call failed: {e}")
                last_error = e
            if attempt < self.max_retries:
                time.sleep(1)
        raise ValueError(f"Failed to extract brand configuration after {self.max_retries} attempts: {last_error}")
