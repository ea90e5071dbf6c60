"""Letter and ayah catalogue."""

from quran_tracer.content.catalog import CatalogError, LetterCatalog
from quran_tracer.content.models import ArabicLetter, Ayah

__all__ = ["ArabicLetter", "Ayah", "CatalogError", "LetterCatalog"]
