from dataclasses import dataclass


@dataclass(frozen=True)
class AgentDescriptor:
	name: str
	focus_constraint: str
	preprint_aware: bool = False
	role: str | None = None

	def allows_preprints(self, include_preprints: bool) -> bool:
		return self.preprint_aware and include_preprints
