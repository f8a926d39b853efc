from typing import Any

from scholaragent.models import SourceRecord

from .base import BIBLIO_TIMEOUT_SECONDS, BibliographicSource

S2_API_URL = 'https://api.semanticscholar.org/graph/v1/paper'
S2_FIELDS = [
	'title',
	'year',
	'venue',
	'authors',
	'abstract',
	'citationCount',
	'fieldsOfStudy',
	'url',
	'externalIds',
]


class SemanticScholarSource(BibliographicSource):
	name = 'semantic_scholar'

	def __init__(self, http_client, timeout: float = BIBLIO_TIMEOUT_SECONDS, api_key: str | None = None):
		super().__init__(http_client, timeout)
		self.api_key = api_key

	async def lookup_by_doi(self, doi: str) -> SourceRecord | None:
		headers = {}
		if self.api_key:
			headers['x-api-key'] = self.api_key

		paper = await self._get_json(f'{S2_API_URL}/DOI:{doi}', params={'fields': ','.join(S2_FIELDS)}, headers=headers)
		if not paper:
			return None
		return self._parse_paper(paper)

	def _parse_paper(self, paper: dict[str, Any]) -> SourceRecord:
		authors = [name for name in (((a or {}).get('name') or '').strip() for a in paper.get('authors') or []) if name]
		external_ids = paper.get('externalIds') or {}

		return SourceRecord(
			source=self.name,
			doi=external_ids.get('DOI'),
			title=(paper.get('title') or '').strip() or None,
			year=paper.get('year'),
			venue=paper.get('venue') or None,
			authors=authors,
			abstract=(paper.get('abstract') or '').strip() or None,
			citation_count=paper.get('citationCount'),
			fields_of_study=list(paper.get('fieldsOfStudy') or []),
			url=paper.get('url'),
		)
