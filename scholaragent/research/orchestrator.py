import asyncio
from collections.abc import Awaitable, Callable, Sequence

from scholaragent.config.settings import Settings
from scholaragent.models import AgentDescriptor, Reference, SearchSession
from scholaragent.utils.logger import logger

from .agent_runner import SearchAgentRunner
from .deduplication import TitleDeduplicator
from .progress import AgentProgress, AgentStatus, NullProgressListener, ProgressListener
from .quality import QualityPolicy
from .validator import ReferenceValidator

AGENT_STAGGER_SECONDS = 1.5


class _SessionListener:
	"""Forwards progress to the caller and records which agents failed."""

	def __init__(self, session: SearchSession, downstream: ProgressListener):
		self.session = session
		self.downstream = downstream

	def on_agent_progress(self, progress: AgentProgress) -> None:
		if progress.status == AgentStatus.ERROR and progress.agent_name not in self.session.failed_agents:
			self.session.failed_agents.append(progress.agent_name)
		self.downstream.on_agent_progress(progress)

	def on_validation_progress(self, completed: int, total: int, last_title: str) -> None:
		self.downstream.on_validation_progress(completed, total, last_title)

	def on_status(self, message: str) -> None:
		self.downstream.on_status(message)


class SearchOrchestrator:
	def __init__(
		self,
		runner: SearchAgentRunner,
		validator: ReferenceValidator,
		roster: Sequence[AgentDescriptor],
		stagger_seconds: float = AGENT_STAGGER_SECONDS,
		deduplicator: TitleDeduplicator | None = None,
		quality_policy: QualityPolicy | None = None,
		sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
	):
		self.runner = runner
		self.validator = validator
		self.roster = list(roster)
		self.stagger_seconds = stagger_seconds
		self.deduplicator = deduplicator or TitleDeduplicator()
		self.quality_policy = quality_policy or QualityPolicy()
		self.sleep = sleep

	@classmethod
	def from_settings(
		cls,
		runner: SearchAgentRunner,
		validator: ReferenceValidator,
		roster: Sequence[AgentDescriptor],
		settings: Settings,
	) -> 'SearchOrchestrator':
		return cls(
			runner,
			validator,
			roster,
			stagger_seconds=settings.AGENT_STAGGER_SECONDS,
			quality_policy=QualityPolicy(keep_unverified_with_doi=settings.KEEP_UNVERIFIED_WITH_DOI),
		)

	async def search(
		self,
		topic: str,
		include_preprints: bool = False,
		listener: ProgressListener | None = None,
		context: str = '',
	) -> list[Reference]:
		session = await self.run_session(topic, include_preprints, listener, context)
		return session.references

	async def run_session(
		self,
		topic: str,
		include_preprints: bool = False,
		listener: ProgressListener | None = None,
		context: str = '',
		generation: int = 0,
	) -> SearchSession:
		"""Run the full search from scratch: agents, dedup, validation, quality filter."""
		session = SearchSession(query=topic, include_preprints=include_preprints, generation=generation)
		session_listener = _SessionListener(session, listener or NullProgressListener())

		logger.info(f'Deploying {len(self.roster)} search agents for: {topic} (preprints={include_preprints})')
		session_listener.on_status(f'Deploying {len(self.roster)} search agents...')

		results = await asyncio.gather(
			*(
				self._launch(index, descriptor, topic, context, include_preprints, session_listener)
				for index, descriptor in enumerate(self.roster)
			)
		)

		for descriptor, references in zip(self.roster, results):
			session.agent_results[descriptor.name] = references

		candidates = [reference for references in results for reference in references]
		session_listener.on_status(f'Consolidating {len(candidates)} raw citations...')
		session.deduped_candidates = self.deduplicator.deduplicate(candidates)

		if session.deduped_candidates:
			session_listener.on_status(f'Validating {len(session.deduped_candidates)} unique papers...')
			session.validated_references = await self.validator.validate_batch(
				session.deduped_candidates, session_listener
			)

		session.references = self.quality_policy.apply(session.validated_references)

		logger.info(
			f'Search complete: {session.raw_candidate_count} raw, {len(session.deduped_candidates)} unique, '
			f'{len(session.references)} kept ({len(session.failed_agents)} agents failed)'
		)
		return session

	async def _launch(
		self,
		index: int,
		descriptor: AgentDescriptor,
		topic: str,
		context: str,
		include_preprints: bool,
		listener: ProgressListener,
	) -> list[Reference]:
		listener.on_agent_progress(AgentProgress(descriptor.name, AgentStatus.IDLE))

		# Staggered launch against the rate limiter
		if index and self.stagger_seconds:
			await self.sleep(index * self.stagger_seconds)

		try:
			return await self.runner.run(descriptor, topic, context, include_preprints, listener)
		except Exception as e:
			logger.error(f'{descriptor.name} crashed: {e}')
			listener.on_agent_progress(AgentProgress(descriptor.name, AgentStatus.ERROR, detail=str(e)))
			return []
