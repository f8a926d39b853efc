import asyncio

import httpx

from scholaragent.config.settings import Settings
from scholaragent.export.bibtex import build_bibtex
from scholaragent.models import Reference, SourceRecord
from scholaragent.modules.bibliography import (
	BibliographicSource,
	CrossrefSource,
	OpenAlexSource,
	SemanticScholarSource,
)
from scholaragent.utils.logger import logger

from .doi import normalize_doi
from .merge import merge_records


class BibliographicResolver:
	"""Confirms a candidate's DOI against three sources and merges their metadata."""

	def __init__(
		self,
		primary: OpenAlexSource,
		citation_graph: BibliographicSource,
		registry: BibliographicSource,
	):
		self.primary = primary
		self.citation_graph = citation_graph
		self.registry = registry

	@classmethod
	def from_settings(cls, http_client: httpx.AsyncClient, settings: Settings) -> 'BibliographicResolver':
		timeout = settings.BIBLIO_TIMEOUT_SECONDS
		return cls(
			primary=OpenAlexSource(http_client, timeout, email=settings.OPENALEX_EMAIL),
			citation_graph=SemanticScholarSource(http_client, timeout, api_key=settings.SEMANTIC_SCHOLAR_API_KEY),
			registry=CrossrefSource(http_client, timeout, email=settings.CROSSREF_EMAIL),
		)

	@property
	def sources_by_trust(self) -> list[BibliographicSource]:
		return [self.registry, self.citation_graph, self.primary]

	async def resolve(self, reference: Reference) -> Reference:
		doi = normalize_doi(reference.doi)
		records = await self._fetch_all(doi) if doi else []

		if not any(records):
			# Missing or unconfirmed DOI: fall back to the title
			title_doi = await self._resolve_by_title(reference.title)
			if title_doi and title_doi != doi:
				logger.debug(f'Title search resolved "{reference.title[:60]}" to {title_doi} (was {doi})')
				doi = title_doi
				records = await self._fetch_all(doi)

		contributing = [record for record in records if record is not None]
		if not contributing:
			logger.debug(f'No source confirmed "{reference.title[:60]}" ({doi})')
			reference.is_verified = False
			return reference

		merge_records(reference, records)
		reference.doi = doi
		reference.is_verified = True
		reference.verified_by = [record.source for record in contributing]
		reference.bibtex = build_bibtex(reference)

		logger.debug(f'Verified {doi} via {", ".join(reference.verified_by)}')
		return reference

	async def _fetch_all(self, doi: str) -> list[SourceRecord | None]:
		return list(await asyncio.gather(*(self._safe_lookup(source, doi) for source in self.sources_by_trust)))

	async def _resolve_by_title(self, title: str) -> str | None:
		try:
			record = await self.primary.search_by_title(title)
		except Exception as e:
			logger.warning(f'Title lookup failed for "{title[:60]}": {e}')
			return None

		if record is None:
			return None
		return normalize_doi(record.doi)

	async def _safe_lookup(self, source: BibliographicSource, doi: str) -> SourceRecord | None:
		try:
			return await source.lookup_by_doi(doi)
		except Exception as e:
			logger.warning(f'{source.name} lookup failed for {doi}: {e}')
			return None
