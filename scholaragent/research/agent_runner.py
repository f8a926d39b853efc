import asyncio
from collections.abc import Awaitable, Callable

from tenacity import AsyncRetrying, RetryCallState, retry_if_exception_type, stop_after_attempt, wait_incrementing

from scholaragent.config.settings import Settings
from scholaragent.errors import RateLimitError
from scholaragent.llm import AgentPurpose, LLMClientFactory
from scholaragent.models import AgentDescriptor, Reference
from scholaragent.utils.logger import logger

from .parsing import parse_agent_output
from .progress import AgentProgress, AgentStatus, NullProgressListener, ProgressListener

RATE_LIMIT_MAX_ATTEMPTS = 3
RATE_LIMIT_BACKOFF_SECONDS = 2.0
CONTEXT_PREVIEW_CHARS = 300


class SearchAgentRunner:
	def __init__(
		self,
		client_factory: LLMClientFactory,
		max_attempts: int = RATE_LIMIT_MAX_ATTEMPTS,
		backoff_seconds: float = RATE_LIMIT_BACKOFF_SECONDS,
		purpose: AgentPurpose = AgentPurpose.DISCOVERY,
		sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
	):
		self.client_factory = client_factory
		self.max_attempts = max_attempts
		self.backoff_seconds = backoff_seconds
		self.purpose = purpose
		self.sleep = sleep

	@classmethod
	def from_settings(cls, client_factory: LLMClientFactory, settings: Settings) -> 'SearchAgentRunner':
		return cls(
			client_factory,
			max_attempts=settings.RATE_LIMIT_MAX_ATTEMPTS,
			backoff_seconds=settings.RATE_LIMIT_BACKOFF_SECONDS,
		)

	def build_prompt(self, descriptor: AgentDescriptor, topic: str, context: str, include_preprints: bool) -> str:
		if descriptor.allows_preprints(include_preprints):
			preprint_policy = 'High-quality preprints (arXiv/bioRxiv) ARE allowed if relevant.'
		else:
			preprint_policy = 'Do NOT include preprints. Strictly peer-reviewed.'

		context_block = ''
		if context:
			context_block = f'\nCONTEXT: "{context[:CONTEXT_PREVIEW_CHARS]}"\n'

		role = f' ({descriptor.role})' if descriptor.role else ''

		return f"""ROLE: Specialized Research Agent for {descriptor.name}{role}.
TASK: Use web search to find 12-15 high-impact academic papers on the topic: "{topic}".
{context_block}
STRICT SOURCE CONSTRAINTS:
{descriptor.focus_constraint}

PREPRINT POLICY: {preprint_policy}

REQUIREMENTS:
1. Verify DOIs/URLs. Fake citations are prohibited.
2. If you cannot find real papers, return an empty array.
3. Include a short snippet from the search result that proves the paper exists.

OUTPUT FORMAT:
Return ONLY a raw JSON array. No markdown.
[{{"title": "...", "authors": ["..."], "year": "...", "url": "...", "doi": "...", "venue": "...", "snippet": "...", "isPreprint": false}}]"""

	async def run(
		self,
		descriptor: AgentDescriptor,
		topic: str,
		context: str = '',
		include_preprints: bool = False,
		listener: ProgressListener | None = None,
	) -> list[Reference]:
		"""Run one search agent. Never raises; a failed agent contributes nothing."""
		listener = listener or NullProgressListener()
		listener.on_agent_progress(AgentProgress(descriptor.name, AgentStatus.SEARCHING))

		prompt = self.build_prompt(descriptor, topic, context, include_preprints)

		try:
			client = self.client_factory.for_purpose(self.purpose, descriptor.name)
			text = await self._generate_with_retry(client, prompt, descriptor, listener)
		except RateLimitError as e:
			logger.warning(f'{descriptor.name} gave up after {self.max_attempts} rate-limited attempts: {e}')
			listener.on_agent_progress(AgentProgress(descriptor.name, AgentStatus.ERROR, detail='rate limited'))
			return []
		except Exception as e:
			logger.error(f'{descriptor.name} failed: {e}')
			listener.on_agent_progress(AgentProgress(descriptor.name, AgentStatus.ERROR, detail=str(e)))
			return []

		references = parse_agent_output(text, descriptor.name)
		listener.on_agent_progress(AgentProgress(descriptor.name, AgentStatus.COMPLETED, found_count=len(references)))
		return references

	async def _generate_with_retry(
		self, client, prompt: str, descriptor: AgentDescriptor, listener: ProgressListener
	) -> str:
		def before_sleep(retry_state: RetryCallState):
			delay = retry_state.next_action.sleep if retry_state.next_action else 0
			logger.warning(
				f'{descriptor.name} hit rate limit. Retrying in {delay:.1f}s '
				f'(attempt {retry_state.attempt_number}/{self.max_attempts})'
			)
			listener.on_agent_progress(
				AgentProgress(descriptor.name, AgentStatus.RETRYING, detail=f'attempt {retry_state.attempt_number}')
			)

		retrying = AsyncRetrying(
			stop=stop_after_attempt(self.max_attempts),
			wait=wait_incrementing(start=self.backoff_seconds, increment=self.backoff_seconds),
			retry=retry_if_exception_type(RateLimitError),
			before_sleep=before_sleep,
			sleep=self.sleep,
			reraise=True,
		)
		return await retrying(client.generate, prompt, web_search=True)
