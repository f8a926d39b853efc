from collections.abc import Sequence

from scholaragent.models import Reference
from scholaragent.utils.logger import logger

from .bibtex import make_citation_key

_LATEX_SPECIALS = {
	'\\': r'\textbackslash{}',
	'&': r'\&',
	'%': r'\%',
	'$': r'\$',
	'#': r'\#',
	'_': r'\_',
	'{': r'\{',
	'}': r'\}',
	'~': r'\textasciitilde{}',
	'^': r'\textasciicircum{}',
}


def escape_latex(text: str) -> str:
	return ''.join(_LATEX_SPECIALS.get(char, char) for char in text)


def assign_citation_keys(references: Sequence[Reference]) -> int:
	"""Give every reference without a key a unique one. Existing keys are never touched.

	Returns the number of keys assigned.
	"""
	used = {r.citation_key for r in references if r.citation_key}
	assigned = 0

	for reference in references:
		if reference.citation_key:
			continue

		base = make_citation_key(reference)
		key = base
		suffix = ord('a')
		while key in used:
			key = f'{base}{chr(suffix)}'
			suffix += 1

		reference.citation_key = key
		used.add(key)
		assigned += 1

	logger.debug(f'Assigned {assigned} citation keys')
	return assigned


def generate_bibliography(references: Sequence[Reference]) -> str:
	lines = ['\\begin{thebibliography}{99}']
	for i, ref in enumerate(references, 1):
		key = ref.citation_key or f'ref{i}'
		venue = ref.venue or ref.source
		lines.append(
			f'\\bibitem{{{key}}} {escape_latex(", ".join(ref.authors))}. '
			f'"{escape_latex(ref.title)}". \\textit{{{escape_latex(venue)}}}, {escape_latex(ref.year)}.'
		)
	lines.append('\\end{thebibliography}')
	return '\n'.join(lines)
