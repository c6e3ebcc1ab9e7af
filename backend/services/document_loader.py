"""Document loading service for PDF processing."""
import logging
import os
import fitz  # PyMuPDF

from models.document import Document, Page

logger = logging.getLogger(__name__)

class DocumentLoader:
    """Loads and extracts page text from a PDF file."""

    def load(self, filepath: str) -> Document:
        """
        Load a single PDF file and extract text page-by-page.

        Args:
            filepath: Path to the PDF file

        Returns:
            Document with one Page per PDF page

        Raises:
            FileNotFoundError: If the file does not exist
        """
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"PDF not found: {filepath}")

        logger.info(f"Loading PDF from path: {filepath}")
        filename = os.path.basename(filepath)

        with fitz.open(filepath) as pdf_document:
            pages = [
                Page(page_number=index + 1, text=page.get_text())
                for index, page in enumerate(pdf_document)
            ]

        document = Document(filename=filename, source_path=filepath, pages=pages)
        logger.info(f"PDF loaded successfully. Number of pages: {document.total_pages}")
        return document
