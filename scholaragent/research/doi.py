import re
from urllib.parse import unquote

DOI_PATTERN = re.compile(r'10\.\d{4,9}/[^\s"<>]+', re.IGNORECASE)

_PREFIX_RE = re.compile(r'^(doi:\s*|(https?://)?(dx\.)?doi\.org/)', re.IGNORECASE)
_TRAILING_PUNCTUATION = '.,;:)]}\'"'


def normalize_doi(raw: str | None) -> str | None:
	"""Extract the canonical ``10.xxxx/...`` form, or None when nothing DOI-shaped is present."""
	if not raw:
		return None

	text = unquote(raw.strip())
	text = _PREFIX_RE.sub('', text)

	match = DOI_PATTERN.search(text)
	if not match:
		return None
	return match.group().rstrip(_TRAILING_PUNCTUATION).lower()


def has_doi_shape(doi: str | None) -> bool:
	return bool(doi) and '10.' in doi
