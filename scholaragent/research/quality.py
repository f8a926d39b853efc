from collections.abc import Sequence
from dataclasses import dataclass

from scholaragent.models import Reference

from .doi import has_doi_shape


@dataclass(frozen=True)
class QualityPolicy:
	"""Which validated references are shown to the user.

	Verified references always pass. With ``keep_unverified_with_doi`` an
	unverified reference that still carries a DOI-shaped string passes too,
	so legitimate but slow-to-verify entries are not discarded. This is a
	known trade-off: a hallucinated DOI can slip through.
	"""

	keep_unverified_with_doi: bool = True

	def accepts(self, reference: Reference) -> bool:
		if reference.is_verified:
			return True
		return self.keep_unverified_with_doi and has_doi_shape(reference.doi)

	def apply(self, references: Sequence[Reference]) -> list[Reference]:
		return [reference for reference in references if self.accepts(reference)]
