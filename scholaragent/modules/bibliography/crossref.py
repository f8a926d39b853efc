import re
from typing import Any

from scholaragent.models import SourceRecord

from .base import BIBLIO_TIMEOUT_SECONDS, BibliographicSource, first_or_none

CROSSREF_API = 'https://api.crossref.org/works'

_JATS_TAG_RE = re.compile(r'<[^>]+>')
_SPACE_RE = re.compile(r'\s+')


def strip_jats(text: str | None) -> str | None:
	"""Crossref abstracts arrive as JATS XML fragments."""
	if not text:
		return None
	cleaned = _SPACE_RE.sub(' ', _JATS_TAG_RE.sub(' ', text)).strip()
	return cleaned or None


class CrossrefSource(BibliographicSource):
	name = 'crossref'

	def __init__(self, http_client, timeout: float = BIBLIO_TIMEOUT_SECONDS, email: str | None = None):
		super().__init__(http_client, timeout)
		self.email = email

	async def lookup_by_doi(self, doi: str) -> SourceRecord | None:
		headers = {}
		if self.email:
			headers['User-Agent'] = f'scholaragent/0.1 (mailto:{self.email})'

		data = await self._get_json(f'{CROSSREF_API}/{doi}', headers=headers)
		message = (data or {}).get('message')
		if not message:
			return None
		return self._parse_message(message)

	def _parse_message(self, message: dict[str, Any]) -> SourceRecord:
		authors = []
		for author in message.get('author') or []:
			name = ' '.join(part for part in (author.get('given'), author.get('family')) if part) or author.get('name')
			if name:
				authors.append(name)

		return SourceRecord(
			source=self.name,
			doi=message.get('DOI'),
			title=first_or_none(message.get('title')),
			year=self._extract_year(message),
			venue=first_or_none(message.get('container-title')),
			authors=authors,
			abstract=strip_jats(message.get('abstract')),
			citation_count=message.get('is-referenced-by-count'),
			fields_of_study=list(message.get('subject') or []),
			url=message.get('URL'),
		)

	def _extract_year(self, message: dict[str, Any]) -> int | None:
		for key in ('published', 'published-print', 'published-online', 'issued'):
			date_parts = (message.get(key) or {}).get('date-parts') or []
			if date_parts and date_parts[0] and date_parts[0][0]:
				return int(date_parts[0][0])
		return None
