import re
from collections.abc import Sequence

from scholaragent.models import UNKNOWN_AUTHOR, Reference

_NON_ALNUM_RE = re.compile(r'[^a-z0-9]')
_STOPWORDS = {'a', 'an', 'the', 'on', 'of', 'for', 'and', 'in', 'to', 'with', 'towards', 'toward'}


def make_citation_key(reference: Reference) -> str:
	"""``surnameYEARword``, e.g. ``vaswani2017attention``."""
	surname = 'anon'
	first_author = (reference.authors[0] or '').strip() if reference.authors else ''
	if first_author and first_author != UNKNOWN_AUTHOR:
		# "Surname, Given" or "Given Surname"
		raw = first_author.split(',')[0] if ',' in first_author else first_author.split()[-1]
		surname = _NON_ALNUM_RE.sub('', raw.lower()) or 'anon'

	year_match = re.search(r'\d{4}', reference.year or '')
	year = year_match.group() if year_match else 'nd'

	word = ''
	for token in reference.title.lower().split():
		token = _NON_ALNUM_RE.sub('', token)
		if token and token not in _STOPWORDS:
			word = token
			break

	return f'{surname}{year}{word}'


def _bibtex_value(value: str) -> str:
	return value.replace('{', '\\{').replace('}', '\\}')


def build_bibtex(reference: Reference, key: str | None = None) -> str:
	key = key or reference.citation_key or make_citation_key(reference)
	entry_type = 'article' if reference.venue else 'misc'

	fields: list[tuple[str, str]] = [('title', reference.title)]
	authors = [a for a in reference.authors if a and a != UNKNOWN_AUTHOR]
	if authors:
		fields.append(('author', ' and '.join(authors)))
	if reference.year and reference.year != 'n.d.':
		fields.append(('year', reference.year))
	if reference.venue:
		fields.append(('journal', reference.venue))
	if reference.doi:
		fields.append(('doi', reference.doi))
	if reference.url:
		fields.append(('url', reference.url))

	body = ',\n'.join(f'  {name} = {{{_bibtex_value(value)}}}' for name, value in fields)
	return f'@{entry_type}{{{key},\n{body}\n}}'


def build_bib_file(references: Sequence[Reference]) -> str:
	entries = [build_bibtex(reference) for reference in references]
	return '\n\n'.join(entries) + '\n' if entries else ''
