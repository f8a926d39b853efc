from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from scholaragent.errors import InvalidTransitionError
from scholaragent.export.latex import assign_citation_keys
from scholaragent.models import MethodologyOption, Reference, ReferenceAudit, ResearchTopic, SearchSession
from scholaragent.modules.synthesis import ResearchSynthesizer
from scholaragent.research.audit import audit_references
from scholaragent.research.orchestrator import SearchOrchestrator
from scholaragent.research.progress import NullProgressListener, ProgressListener
from scholaragent.utils.logger import logger


class Phase(Enum):
	DOMAIN_INPUT = 'domain_input'
	SEARCHING = 'searching'
	CURATION = 'curation'
	TOPIC_SELECTION = 'topic_selection'
	METHODOLOGY_SELECTION = 'methodology_selection'
	TEMPLATE_SELECTION = 'template_selection'
	DRAFTING = 'drafting'
	FINISHED = 'finished'


@dataclass
class ResearchState:
	domain: str = ''
	include_preprints: bool = False
	phase: Phase = Phase.DOMAIN_INPUT
	session: SearchSession | None = None
	references: list[Reference] = field(default_factory=list)
	selected_references: list[Reference] = field(default_factory=list)
	topics: list[ResearchTopic] = field(default_factory=list)
	selected_topic: ResearchTopic | None = None
	methodologies: list[MethodologyOption] = field(default_factory=list)
	selected_methodology: MethodologyOption | None = None
	template: str | None = None
	logs: list[str] = field(default_factory=list)


class PipelineController:
	"""Session state machine: domain → search → curation → topic → methodology → template → drafting."""

	def __init__(
		self,
		orchestrator: SearchOrchestrator,
		synthesizer: ResearchSynthesizer,
		listener: ProgressListener | None = None,
	):
		self.orchestrator = orchestrator
		self.synthesizer = synthesizer
		self.listener = listener or NullProgressListener()
		self.state = ResearchState()
		self._generation = 0

	@property
	def phase(self) -> Phase:
		return self.state.phase

	@property
	def generation(self) -> int:
		return self._generation

	def _require(self, *phases: Phase):
		if self.state.phase not in phases:
			allowed = ', '.join(p.value for p in phases)
			raise InvalidTransitionError(f'Cannot do this in phase {self.state.phase.value} (expected {allowed})')

	async def submit_domain(self, domain: str) -> list[Reference] | None:
		domain = domain.strip()
		if not domain:
			raise ValueError('Research domain must not be empty')

		self._require(Phase.DOMAIN_INPUT, Phase.SEARCHING, Phase.CURATION)
		self.state.domain = domain
		return await self._search()

	async def toggle_preprints(self, enabled: bool) -> list[Reference] | None:
		"""Store the flag; re-run the whole search when a literature review is on screen."""
		self.state.include_preprints = enabled

		if not self.state.domain or self.state.phase not in (Phase.SEARCHING, Phase.CURATION):
			return None

		logger.info(f'Preprint inclusion set to {enabled}, re-running search')
		return await self._search()

	async def _search(self) -> list[Reference] | None:
		self._generation += 1
		generation = self._generation

		self.state.phase = Phase.SEARCHING
		self.state.references = []

		session = await self.orchestrator.run_session(
			self.state.domain,
			self.state.include_preprints,
			self.listener,
			generation=generation,
		)

		if generation != self._generation:
			logger.info(f'Discarding results of superseded search #{generation}')
			return None

		self.state.session = session
		self.state.references = session.references
		self.state.phase = Phase.CURATION

		audit = audit_references(session.references)
		self.state.logs.append(f'Literature review: {audit.summary()}')
		return session.references

	async def confirm_references(self, selected: Sequence[Reference]) -> list[ResearchTopic]:
		self._require(Phase.CURATION)
		if not selected:
			raise ValueError('Select at least one reference')

		topics = await self.synthesizer.generate_topics(self.state.domain, selected)

		self.state.selected_references = list(selected)
		self.state.topics = topics
		# The search session is not needed past curation
		self.state.session = None
		self.state.phase = Phase.TOPIC_SELECTION
		return topics

	async def select_topic(self, topic: ResearchTopic) -> list[MethodologyOption]:
		self._require(Phase.TOPIC_SELECTION)

		methodologies = await self.synthesizer.propose_methodologies(topic.title, self.state.references)

		self.state.selected_topic = topic
		self.state.methodologies = methodologies
		self.state.phase = Phase.METHODOLOGY_SELECTION
		return methodologies

	def select_methodology(self, option: MethodologyOption):
		self._require(Phase.METHODOLOGY_SELECTION)
		self.state.selected_methodology = option
		self.state.phase = Phase.TEMPLATE_SELECTION

	def select_template(self, template: str):
		self._require(Phase.TEMPLATE_SELECTION)
		self.state.template = template
		assign_citation_keys(self.state.selected_references)
		self.state.phase = Phase.DRAFTING

	def finish(self):
		self._require(Phase.DRAFTING)
		self.state.phase = Phase.FINISHED

	def back_to_domain(self):
		# Any in-flight search becomes stale
		self._generation += 1
		self.state = ResearchState(include_preprints=self.state.include_preprints)

	def audit(self) -> ReferenceAudit:
		return audit_references(self.state.references)
