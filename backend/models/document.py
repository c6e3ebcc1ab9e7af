"""Document data models used by the ingestion job."""
from dataclasses import dataclass, field
from typing import List

@dataclass
class Page:
    """Represents a single page of extracted PDF text."""
    page_number: int  # 1-indexed
    text: str

@dataclass
class Document:
    """Represents a loaded PDF document."""
    filename: str
    source_path: str
    pages: List[Page] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return len(self.pages)
