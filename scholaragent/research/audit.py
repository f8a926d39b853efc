from collections.abc import Sequence

from scholaragent.models import Reference, ReferenceAudit

SUSPICIOUS_SAMPLE_SIZE = 5


def audit_references(references: Sequence[Reference]) -> ReferenceAudit:
	total = len(references)
	verified = sum(1 for r in references if r.is_verified)
	unverified = [r for r in references if not r.is_verified]

	return ReferenceAudit(
		total=total,
		verified=verified,
		unverified=len(unverified),
		hallucination_rate=round(len(unverified) / total * 100) if total else 0,
		suspicious_refs=[r.title for r in unverified[:SUSPICIOUS_SAMPLE_SIZE]],
		health_score=round(verified / total * 100) if total else 100,
	)
