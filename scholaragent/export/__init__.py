from .bibtex import build_bib_file, build_bibtex, make_citation_key
from .latex import assign_citation_keys, escape_latex, generate_bibliography

__all__ = [
	'assign_citation_keys',
	'build_bib_file',
	'build_bibtex',
	'escape_latex',
	'generate_bibliography',
	'make_citation_key',
]
