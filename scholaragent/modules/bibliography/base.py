from abc import ABC, abstractmethod
from typing import Any

import httpx

from scholaragent.models import SourceRecord

# Per-request timeout for bibliographic lookups
BIBLIO_TIMEOUT_SECONDS = 8.0


class BibliographicSource(ABC):
	name: str = ''

	def __init__(self, http_client: httpx.AsyncClient, timeout: float = BIBLIO_TIMEOUT_SECONDS):
		self.http_client = http_client
		self.timeout = timeout

	@abstractmethod
	async def lookup_by_doi(self, doi: str) -> SourceRecord | None:
		raise NotImplementedError

	async def _get_json(
		self, url: str, params: dict[str, Any] | None = None, headers: dict[str, str] | None = None
	) -> dict[str, Any] | None:
		response = await self.http_client.get(url, params=params, headers=headers, timeout=self.timeout)
		if response.status_code == 404:
			return None
		response.raise_for_status()

		data = response.json()
		if not isinstance(data, dict):
			raise ValueError(f'{self.name}: unexpected payload type {type(data).__name__}')
		return data


def first_or_none(values: Any) -> Any:
	if isinstance(values, list) and values:
		return values[0]
	return None
