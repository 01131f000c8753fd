# parsers/base.py

from abc import ABC, abstractmethod

from .models import Document


class DocumentParser(ABC):
    @abstractmethod
    def parse(self, source: str, *, source_id: str = "<string>") -> Document:
        """
        Parse raw note text and return a structured, deterministic document.

        Requirements:
        - Deterministic output for same input
        - Never raises on malformed input; unrecognized lines become text
        - Output is immutable
        """
        raise NotImplementedError
