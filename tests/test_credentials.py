import pytest

from scholaragent.config.settings import Settings
from scholaragent.errors import ConfigurationError
from scholaragent.llm import AgentPurpose, LLMClientFactory, select_shard


def test_select_shard_is_deterministic_and_in_range():
	for agent in ('IEEE Xplore', 'Springer Nature', 'Elsevier', 'General', None):
		index = select_shard('DISCOVERY', agent, 3)
		assert 0 <= index < 3
		assert select_shard('DISCOVERY', agent, 3) == index


def test_select_shard_single_key():
	assert select_shard('SYNTHESIS', 'anything', 1) == 0
	assert select_shard('SYNTHESIS', None, 0) == 0


def test_select_shard_handles_long_seeds():
	assert 0 <= select_shard('DEEP_SEARCH', 'x' * 500, 7) < 7


def test_factory_requires_keys():
	with pytest.raises(ConfigurationError):
		LLMClientFactory('openrouter', [], 'search-model', 'synthesis-model')


def test_factory_rejects_unknown_provider():
	with pytest.raises(ConfigurationError):
		LLMClientFactory('carrier-pigeon', ['k'], 'search-model', 'synthesis-model')


def test_factory_caches_clients_and_picks_models():
	factory = LLMClientFactory('openrouter', ['k1', 'k2', 'k3'], 'search-model', 'synthesis-model')

	search = factory.for_purpose(AgentPurpose.DISCOVERY, 'IEEE Xplore')
	synthesis = factory.for_purpose(AgentPurpose.SYNTHESIS)

	assert factory.for_purpose(AgentPurpose.DISCOVERY, 'IEEE Xplore') is search
	assert search.model == 'search-model'
	assert synthesis.model == 'synthesis-model'
	assert search.api_key in ('k1', 'k2', 'k3')


def test_factory_from_settings():
	settings = Settings(LLM_API_KEYS='k1, k2,,', LLM_PROVIDER='anthropic', SEARCH_MODEL='s', SYNTHESIS_MODEL='y')

	factory = LLMClientFactory.from_settings(settings)

	assert factory.key_count == 2
	assert factory.for_purpose(AgentPurpose.GENERAL).provider.value == 'anthropic'
