from .base import BIBLIO_TIMEOUT_SECONDS, BibliographicSource
from .crossref import CrossrefSource
from .openalex import OpenAlexSource, reconstruct_abstract
from .semantic_scholar import SemanticScholarSource

__all__ = [
	'BIBLIO_TIMEOUT_SECONDS',
	'BibliographicSource',
	'CrossrefSource',
	'OpenAlexSource',
	'SemanticScholarSource',
	'reconstruct_abstract',
]
