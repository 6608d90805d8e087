from typing import Dict, Any, Union
import fitz
from core.logger import get_logger

logger = get_logger("pdf_parser")

def parse_pdf(source: Union[str, bytes]) -> Dict[str, Any]:
    """Extract text, page count, metadata and word statistics from a PDF path or bytes"""
    try:
        if isinstance(source, (bytes, bytearray)):
            doc = fitz.open(stream=bytes(source), filetype="pdf")
        else:
            doc = fitz.open(source)
    except Exception as e:
        logger.error(f"Failed to open PDF: {e}")
        raise ValueError(f"Error processing the PDF file: {e}") from e

    try:
        pages = [doc.load_page(i).get_text() for i in range(doc.page_count)]
        text = "\n".join(pages)
        words = text.split()
        result = {
            "total_pages": doc.page_count,
            "text": text,
            "metadata": {k: v for k, v in (doc.metadata or {}).items() if v},
            "statistics": {
                "total_pages": doc.page_count,
                "total_words": len(words),
            },
        }
    finally:
        doc.close()

    logger.info(f"📄 Parsed PDF: {result['total_pages']} pages, {result['statistics']['total_words']} words")
    return result
