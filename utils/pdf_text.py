"""PDF text extraction."""

from io import BytesIO

from pypdf import PdfReader

from core.exceptions import UpstreamError
from core.logger import get_logger

logger = get_logger("pdf_text")


def extract_pdf_text(data: bytes) -> str:
    """Extracts plain text from every page of a PDF, in page order.

    Args:
        data: Raw PDF bytes

    Returns:
        Page texts joined with newlines

    Raises:
        UpstreamError: the PDF cannot be parsed or has no extractable text
    """
    try:
        reader = PdfReader(BytesIO(data))
        text = "\n".join(page.extract_text() or "" for page in reader.pages)
    except Exception as e:
        logger.error(f"PDF extraction failed: {e}")
        raise UpstreamError(
            message="Failed to extract text from PDF",
            details={"error": str(e)},
        ) from e

    if not text.strip():
        raise UpstreamError(message="PDF contains no extractable text")

    logger.info(f"Extracted {len(text)} characters from {len(reader.pages)} page(s)")
    return text


def truncate_text(text: str, max_chars: int) -> str:
    """Keeps the first ``max_chars`` characters of ``text``."""
    if max_chars <= 0:
        return text
    return text[:max_chars]
