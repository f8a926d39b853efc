"""Field-level reconciliation of bibliographic records.

Records are applied in ascending trust order, so a later (more trusted)
source overwrites an earlier one, subject to three gates: text fields only
overwrite with non-empty values, citation counts never decrease, and
abstracts only overwrite with substantial text.
"""

from collections.abc import Sequence

from scholaragent.models import Reference, SourceRecord

# Ascending trust: registry < citation graph < primary index
TRUST_ORDER = ('crossref', 'semantic_scholar', 'openalex')

MIN_ABSTRACT_LENGTH = 50


def _set(reference: Reference, name: str, value, source: str, updated: list[str]):
	setattr(reference, name, value)
	reference.field_sources[name] = source
	updated.append(name)


def merge_record(reference: Reference, record: SourceRecord) -> list[str]:
	"""Apply one record on top of the reference. Returns the names of the fields it set."""
	updated: list[str] = []

	for name in ('title', 'venue', 'url'):
		value = getattr(record, name)
		if value and value.strip():
			_set(reference, name, value.strip(), record.source, updated)

	if record.year:
		_set(reference, 'year', str(record.year), record.source, updated)

	authors = [author.strip() for author in record.authors if author and author.strip()]
	if authors:
		_set(reference, 'authors', authors, record.source, updated)

	if record.fields_of_study:
		_set(reference, 'fields_of_study', list(record.fields_of_study), record.source, updated)

	if record.abstract and len(record.abstract.strip()) >= MIN_ABSTRACT_LENGTH:
		_set(reference, 'abstract', record.abstract.strip(), record.source, updated)

	if record.citation_count is not None and (
		reference.citation_count is None or record.citation_count > reference.citation_count
	):
		_set(reference, 'citation_count', record.citation_count, record.source, updated)

	return updated


def merge_records(reference: Reference, records: Sequence[SourceRecord | None]) -> Reference:
	"""Merge records given in ascending trust order; ``None`` entries contribute nothing."""
	for record in records:
		if record is not None:
			merge_record(reference, record)
	return reference
