from dataclasses import dataclass, field

UNKNOWN_AUTHOR = 'Unknown'
UNKNOWN_YEAR = 'n.d.'


@dataclass
class Reference:
	"""A citation found by a search agent, enriched in place once validated.

	Starts life as a candidate (``is_verified`` is always False at creation)
	and becomes a verified reference when the resolver confirms its DOI with
	at least one bibliographic source.
	"""

	title: str
	authors: list[str] = field(default_factory=lambda: [UNKNOWN_AUTHOR])
	year: str = UNKNOWN_YEAR
	doi: str | None = None
	url: str | None = None
	venue: str | None = None
	source: str = ''
	is_preprint: bool = False
	is_verified: bool = False
	snippet: str | None = None

	# Enrichment
	citation_count: int | None = None
	abstract: str | None = None
	fields_of_study: list[str] | None = None
	bibtex: str | None = None
	citation_key: str | None = None

	# Provenance
	verified_by: list[str] = field(default_factory=list)
	field_sources: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SourceRecord:
	"""Normalized metadata returned by one bibliographic source."""

	source: str
	doi: str | None = None
	title: str | None = None
	year: int | None = None
	venue: str | None = None
	authors: list[str] = field(default_factory=list)
	abstract: str | None = None
	citation_count: int | None = None
	fields_of_study: list[str] = field(default_factory=list)
	url: str | None = None
