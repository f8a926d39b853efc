"""OpenAlex client, the primary (most trusted) bibliographic index."""

import re
from typing import Any

from scholaragent.models import SourceRecord

from .base import BIBLIO_TIMEOUT_SECONDS, BibliographicSource

OPENALEX_API = 'https://api.openalex.org/works'
DOI_URL_PREFIX = 'https://doi.org/'

_TITLE_QUERY_RE = re.compile(r'[^\w\s]', re.UNICODE)


def reconstruct_abstract(inverted_index: dict[str, list[int]] | None) -> str | None:
	"""Reassemble abstract text from an OpenAlex ``{word: [position, ...]}`` index."""
	if not inverted_index:
		return None

	positioned = [(pos, word) for word, positions in inverted_index.items() for pos in positions]
	positioned.sort()
	return ' '.join(word for _, word in positioned)


class OpenAlexSource(BibliographicSource):
	name = 'openalex'

	def __init__(self, http_client, timeout: float = BIBLIO_TIMEOUT_SECONDS, email: str | None = None):
		super().__init__(http_client, timeout)
		self.email = email

	def _params(self, extra: dict[str, Any] | None = None) -> dict[str, Any]:
		params = dict(extra or {})
		if self.email:
			params['mailto'] = self.email
		return params

	async def lookup_by_doi(self, doi: str) -> SourceRecord | None:
		work = await self._get_json(f'{OPENALEX_API}/doi:{doi}', params=self._params())
		if not work:
			return None
		return self._parse_work(work)

	async def search_by_title(self, title: str) -> SourceRecord | None:
		query = _TITLE_QUERY_RE.sub('', title).strip()
		if not query:
			return None

		data = await self._get_json(
			OPENALEX_API, params=self._params({'filter': f'title.search:{query}', 'per-page': 1})
		)
		results = (data or {}).get('results') or []
		if not results:
			return None
		return self._parse_work(results[0])

	def _parse_work(self, work: dict[str, Any]) -> SourceRecord:
		doi = work.get('doi')
		if doi and doi.startswith(DOI_URL_PREFIX):
			doi = doi[len(DOI_URL_PREFIX) :]

		authors = []
		for authorship in work.get('authorships') or []:
			name = ((authorship.get('author') or {}).get('display_name') or '').strip()
			if name:
				authors.append(name)

		primary = work.get('primary_location') or {}
		venue = (primary.get('source') or {}).get('display_name')

		fields = [c['display_name'] for c in work.get('concepts') or [] if c.get('level') == 0 and c.get('display_name')]

		return SourceRecord(
			source=self.name,
			doi=doi,
			title=work.get('title') or work.get('display_name'),
			year=work.get('publication_year'),
			venue=venue,
			authors=authors,
			abstract=reconstruct_abstract(work.get('abstract_inverted_index')),
			citation_count=work.get('cited_by_count'),
			fields_of_study=fields,
			url=work.get('doi') or primary.get('landing_page_url'),
		)
