from .merger import DEFAULT_DUPLICATE_THRESHOLD, SectionMerger, merge
from .models import (
    CanonicalDocument,
    CanonicalSection,
    Section,
    SectionVariant,
    SourceScore,
)
from .sections import normalize_heading, path_key, split_sections
from .similarity import normalize_code, similarity

__all__ = [
    "DEFAULT_DUPLICATE_THRESHOLD",
    "CanonicalDocument",
    "CanonicalSection",
    "Section",
    "SectionMerger",
    "SectionVariant",
    "SourceScore",
    "merge",
    "normalize_code",
    "normalize_heading",
    "path_key",
    "similarity",
    "split_sections",
]
