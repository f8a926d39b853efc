from dataclasses import dataclass


@dataclass(frozen=True)
class ResearchTopic:
	id: str
	title: str
	description: str
	gap: str
	novelty_score: int
	feasibility: str


@dataclass(frozen=True)
class MethodologyOption:
	id: str
	name: str
	description: str
	implications: str
	justification: str


@dataclass(frozen=True)
class ReferenceAudit:
	total: int
	verified: int
	unverified: int
	hallucination_rate: int
	suspicious_refs: list[str]
	health_score: int

	def summary(self) -> str:
		return f'{self.verified} verified, {self.unverified} unverified'
