from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from scholaragent.errors import LLMGenerationError, RateLimitError
from scholaragent.llm.client import LLMClient, is_rate_limit_error


class FakeStatusError(Exception):
	status_code = 429


def test_is_rate_limit_error():
	assert is_rate_limit_error(FakeStatusError('slow down'))
	assert is_rate_limit_error(Exception('Resource has been exhausted (e.g. check quota).'))
	assert is_rate_limit_error(RateLimitError('x'))
	assert is_rate_limit_error(Exception('Error code: 429 - Too Many Requests'))
	assert not is_rate_limit_error(ValueError('bad request'))


def test_numbers_in_messages_are_not_rate_limits():
	assert not is_rate_limit_error(ValueError('Unknown DOI 10.1145/3429.1234'))
	assert not is_rate_limit_error(Exception('Prompt is 14290 tokens, limit is 8192'))
	assert not is_rate_limit_error(Exception('request id req_4293a failed'))


def test_response_status_429():
	error = Exception('upstream error')
	error.response = SimpleNamespace(status_code=429)
	assert is_rate_limit_error(error)


@pytest.fixture
def client():
	llm = LLMClient(provider='openrouter', model='test-model', api_key='k')
	llm._client = MagicMock()
	return llm


async def test_openrouter_web_search_plugin(client):
	response = SimpleNamespace(
		choices=[SimpleNamespace(message=SimpleNamespace(content='[]'))],
		usage=SimpleNamespace(prompt_tokens=10, completion_tokens=5),
	)
	client._client.chat.completions.create = AsyncMock(return_value=response)

	assert await client.generate('find papers', web_search=True) == '[]'

	kwargs = client._client.chat.completions.create.call_args.kwargs
	assert kwargs['extra_body'] == {'plugins': [{'id': 'web'}]}
	assert client.get_usage_stats()['total_tokens'] == 15


async def test_rate_limit_is_translated(client):
	client._client.chat.completions.create = AsyncMock(side_effect=FakeStatusError('Too Many Requests'))

	with pytest.raises(RateLimitError):
		await client.generate('x')


async def test_other_failures_become_generation_errors(client):
	client._client.chat.completions.create = AsyncMock(side_effect=ValueError('invalid model'))

	with pytest.raises(LLMGenerationError):
		await client.generate('x')


async def test_anthropic_joins_text_blocks():
	llm = LLMClient(provider='anthropic', model='claude', api_key='k')
	llm._client = MagicMock()
	response = SimpleNamespace(
		content=[
			SimpleNamespace(type='server_tool_use'),
			SimpleNamespace(type='text', text='[{"title": '),
			SimpleNamespace(type='text', text='"T"}]'),
		],
		usage=None,
	)
	llm._client.messages.create = AsyncMock(return_value=response)

	assert await llm.generate('x', web_search=True) == '[{"title": "T"}]'
	assert llm._client.messages.create.call_args.kwargs['tools'][0]['type'] == 'web_search_20250305'
