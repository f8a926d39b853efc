from dataclasses import dataclass, field

from .reference import Reference


@dataclass
class SearchSession:
	query: str
	include_preprints: bool
	generation: int = 0
	agent_results: dict[str, list[Reference]] = field(default_factory=dict)
	failed_agents: list[str] = field(default_factory=list)
	deduped_candidates: list[Reference] = field(default_factory=list)
	validated_references: list[Reference] = field(default_factory=list)
	references: list[Reference] = field(default_factory=list)

	@property
	def raw_candidate_count(self) -> int:
		return sum(len(refs) for refs in self.agent_results.values())
