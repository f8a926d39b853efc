from collections.abc import Sequence

from scholaragent.models import Reference
from scholaragent.utils.logger import logger

# No truncation: long titles sharing a prefix must stay distinct.
TITLE_KEY_MAX_LENGTH: int | None = None


def title_key(title: str, max_length: int | None = TITLE_KEY_MAX_LENGTH) -> str:
	key = ''.join(char for char in title.casefold() if char.isalnum())
	return key[:max_length] if max_length else key


class TitleDeduplicator:
	def __init__(self, max_key_length: int | None = TITLE_KEY_MAX_LENGTH):
		self.max_key_length = max_key_length

	def deduplicate(self, references: Sequence[Reference]) -> list[Reference]:
		"""First occurrence of each normalized title wins."""
		if not references:
			return []

		seen: set[str] = set()
		unique: list[Reference] = []

		for reference in references:
			key = title_key(reference.title, self.max_key_length)
			if not key:
				# Nothing to compare on (punctuation only); keep it.
				unique.append(reference)
				continue
			if key in seen:
				logger.debug(f'Duplicate dropped: {reference.title[:60]} ({reference.source})')
				continue
			seen.add(key)
			unique.append(reference)

		logger.info(
			f'Deduplication complete: {len(references)} → {len(unique)} '
			f'({len(references) - len(unique)} duplicates removed)'
		)
		return unique
