from enum import Enum

from scholaragent.config.settings import Settings
from scholaragent.errors import ConfigurationError
from scholaragent.utils.logger import logger

from .client import LLMClient, LLMProvider


class AgentPurpose(Enum):
	DISCOVERY = 'DISCOVERY'
	DEEP_SEARCH = 'DEEP_SEARCH'
	SYNTHESIS = 'SYNTHESIS'
	GENERAL = 'GENERAL'


def _to_int32(value: int) -> int:
	value &= 0xFFFFFFFF
	return value - 0x100000000 if value & 0x80000000 else value


def select_shard(purpose: str, distinct_id: str | None, shard_count: int) -> int:
	"""Deterministically map a purpose (and optional agent id) to a credential index.

	Agents with different ids spread across the key pool so that one
	exhausted quota does not stall the whole swarm.
	"""
	if shard_count <= 1:
		return 0

	seed = f'{purpose}-{distinct_id}' if distinct_id else purpose
	value = 0
	for char in seed:
		value = ord(char) + (_to_int32(_to_int32(value) << 5) - value)
	return abs(value) % shard_count


class LLMClientFactory:
	def __init__(
		self,
		provider: str,
		api_keys: list[str],
		search_model: str,
		synthesis_model: str,
		timeout: float = 30.0,
	):
		if not api_keys:
			raise ConfigurationError('No LLM API keys configured (set LLM_API_KEYS)')
		try:
			self.provider = LLMProvider(provider)
		except ValueError as e:
			raise ConfigurationError(f'Unsupported LLM provider: {provider}') from e

		self.api_keys = api_keys
		self.search_model = search_model
		self.synthesis_model = synthesis_model
		self.timeout = timeout
		self._clients: dict[tuple[int, str], LLMClient] = {}

		logger.info(f'{len(api_keys)} API key(s) loaded for {self.provider.value}')

	@classmethod
	def from_settings(cls, settings: Settings) -> 'LLMClientFactory':
		return cls(
			provider=settings.LLM_PROVIDER,
			api_keys=settings.api_keys,
			search_model=settings.SEARCH_MODEL,
			synthesis_model=settings.SYNTHESIS_MODEL,
			timeout=settings.LLM_TIMEOUT_SECONDS,
		)

	@property
	def key_count(self) -> int:
		return len(self.api_keys)

	def for_purpose(self, purpose: AgentPurpose, distinct_id: str | None = None) -> LLMClient:
		model = self.synthesis_model if purpose == AgentPurpose.SYNTHESIS else self.search_model
		index = select_shard(purpose.value, distinct_id, self.key_count)

		cache_key = (index, model)
		if cache_key not in self._clients:
			self._clients[cache_key] = LLMClient(
				provider=self.provider.value,
				model=model,
				api_key=self.api_keys[index],
				timeout=self.timeout,
			)
		return self._clients[cache_key]
