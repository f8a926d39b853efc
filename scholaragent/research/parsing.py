"""Tolerant parsing of the JSON arrays search agents are asked to emit."""

import json
import re
from dataclasses import dataclass, field
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from scholaragent.models import UNKNOWN_AUTHOR, UNKNOWN_YEAR, Reference
from scholaragent.utils.logger import logger

_FENCE_RE = re.compile(r'^```[a-zA-Z]*\s*|\s*```$')
_ARRAY_RE = re.compile(r'\[.*\]', re.DOTALL)
_WRAPPER_KEYS = ('results', 'references', 'papers', 'citations')


@dataclass(frozen=True)
class ParseResult:
	items: list[Any] = field(default_factory=list)
	malformed: bool = False

	@classmethod
	def ok(cls, items: list[Any]) -> 'ParseResult':
		return cls(items=items, malformed=False)

	@classmethod
	def failed(cls) -> 'ParseResult':
		return cls(items=[], malformed=True)


class AgentReferenceItem(BaseModel):
	"""One element of an agent's JSON array. Unknown keys are ignored."""

	model_config = ConfigDict(extra='ignore', populate_by_name=True)

	title: str
	authors: list[str] = Field(default_factory=list)
	year: str | None = None
	doi: str | None = None
	url: str | None = None
	venue: str | None = None
	snippet: str | None = None
	is_preprint: bool = Field(default=False, validation_alias=AliasChoices('isPreprint', 'is_preprint'))

	@field_validator('title')
	@classmethod
	def title_not_blank(cls, value: str) -> str:
		value = value.strip()
		if not value:
			raise ValueError('title is empty')
		return value

	@field_validator('authors', mode='before')
	@classmethod
	def coerce_authors(cls, value: Any) -> list[str]:
		if value is None:
			return []
		if isinstance(value, str):
			return [a.strip() for a in value.split(',') if a.strip()]
		if isinstance(value, list):
			names = []
			for author in value:
				if isinstance(author, dict):
					author = author.get('name') or author.get('display_name')
				if isinstance(author, str) and author.strip():
					names.append(author.strip())
			return names
		return []

	@field_validator('year', mode='before')
	@classmethod
	def coerce_year(cls, value: Any) -> str | None:
		if value is None or isinstance(value, bool):
			return None
		value = str(value).strip()
		return value or None

	@field_validator('doi', 'url', 'venue', 'snippet', mode='before')
	@classmethod
	def coerce_optional_text(cls, value: Any) -> str | None:
		if value is None or isinstance(value, (dict, list, bool)):
			return None
		value = str(value).strip()
		return value or None

	@field_validator('is_preprint', mode='before')
	@classmethod
	def coerce_preprint(cls, value: Any) -> bool:
		if isinstance(value, str):
			return value.strip().lower() in ('true', 'yes', '1')
		return bool(value)


def _strip_fences(text: str) -> str:
	return _FENCE_RE.sub('', text.strip()).strip()


def _as_list(parsed: Any) -> list[Any] | None:
	if isinstance(parsed, list):
		return parsed
	if isinstance(parsed, dict):
		for key in _WRAPPER_KEYS:
			if isinstance(parsed.get(key), list):
				return parsed[key]
	return None


def extract_json_array(text: str | None) -> ParseResult:
	"""Find the JSON array in freeform model output.

	Tries the fence-stripped text first, then the first ``[...]`` span.
	Never raises.
	"""
	if not text or not text.strip():
		return ParseResult.failed()

	try:
		items = _as_list(json.loads(_strip_fences(text)))
		if items is not None:
			return ParseResult.ok(items)
	except json.JSONDecodeError:
		pass

	match = _ARRAY_RE.search(text)
	if match:
		try:
			items = _as_list(json.loads(match.group()))
			if items is not None:
				return ParseResult.ok(items)
		except json.JSONDecodeError:
			pass

	return ParseResult.failed()


def to_reference(item: AgentReferenceItem, agent_name: str) -> Reference:
	return Reference(
		title=item.title,
		authors=item.authors or [UNKNOWN_AUTHOR],
		year=item.year or UNKNOWN_YEAR,
		doi=item.doi,
		url=item.url,
		venue=item.venue,
		source=agent_name,
		is_preprint=item.is_preprint,
		is_verified=False,
		snippet=item.snippet,
	)


def parse_agent_output(text: str | None, agent_name: str) -> list[Reference]:
	result = extract_json_array(text)
	if result.malformed:
		logger.warning(f'{agent_name}: could not find a JSON array in the response')
		return []

	references = []
	for raw in result.items:
		if not isinstance(raw, dict):
			logger.debug(f'{agent_name}: skipping non-object item {raw!r:.80}')
			continue
		try:
			item = AgentReferenceItem.model_validate(raw)
		except ValidationError as e:
			logger.debug(f'{agent_name}: skipping malformed item: {e.error_count()} error(s)')
			continue
		references.append(to_reference(item, agent_name))

	return references
