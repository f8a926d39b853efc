from enum import Enum
from typing import Protocol

from scholaragent.errors import LLMGenerationError, RateLimitError
from scholaragent.utils.logger import logger

OPENROUTER_BASE_URL = 'https://openrouter.ai/api/v1'
ANTHROPIC_WEB_SEARCH_TOOL = {'type': 'web_search_20250305', 'name': 'web_search', 'max_uses': 5}
RATE_LIMIT_PHRASES = ('rate limit', 'rate_limit', 'too many requests', 'resource has been exhausted')


class LLMProvider(Enum):
	OPENROUTER = 'openrouter'
	ANTHROPIC = 'anthropic'


class TextGenerator(Protocol):
	async def generate(self, prompt: str, system_prompt: str | None = None, web_search: bool = False) -> str: ...


class LLMClient:
	def __init__(
		self,
		provider: str,
		model: str,
		api_key: str,
		temperature: float = 0.2,
		max_tokens: int = 4000,
		timeout: float = 30.0,
	):
		self.provider = LLMProvider(provider)
		self.model = model
		self.api_key = api_key
		self.temperature = temperature
		self.max_tokens = max_tokens
		self.timeout = timeout

		self.total_input_tokens = 0
		self.total_output_tokens = 0

		self._client = self._initialize_client()
		logger.debug(f'LLM Client initialized: {provider}/{model}')

	def _initialize_client(self):
		if self.provider == LLMProvider.OPENROUTER:
			from openai import AsyncOpenAI

			return AsyncOpenAI(base_url=OPENROUTER_BASE_URL, api_key=self.api_key, timeout=self.timeout, max_retries=0)
		elif self.provider == LLMProvider.ANTHROPIC:
			from anthropic import AsyncAnthropic

			return AsyncAnthropic(api_key=self.api_key, timeout=self.timeout, max_retries=0)
		else:
			raise ValueError(f'Unsupported provider: {self.provider}')

	async def generate(
		self,
		prompt: str,
		system_prompt: str | None = None,
		web_search: bool = False,
		temperature: float | None = None,
		max_tokens: int | None = None,
	) -> str:
		temp = temperature if temperature is not None else self.temperature
		max_tok = max_tokens if max_tokens is not None else self.max_tokens

		try:
			if self.provider == LLMProvider.OPENROUTER:
				return await self._generate_openrouter(prompt, system_prompt, web_search, temp, max_tok)
			return await self._generate_anthropic(prompt, system_prompt, web_search, temp, max_tok)
		except Exception as e:
			if is_rate_limit_error(e):
				raise RateLimitError(f'{self.provider.value} rate limited: {e}') from e
			logger.error(f'Generation failed ({self.provider.value}/{self.model}): {e}')
			raise LLMGenerationError(f'Failed to generate text: {e}') from e

	async def _generate_openrouter(
		self, prompt: str, system_prompt: str | None, web_search: bool, temperature: float, max_tokens: int
	) -> str:
		messages = []

		if system_prompt:
			messages.append({'role': 'system', 'content': system_prompt})

		messages.append({'role': 'user', 'content': prompt})

		kwargs = {}
		if web_search:
			kwargs['extra_body'] = {'plugins': [{'id': 'web'}]}

		response = await self._client.chat.completions.create(
			model=self.model, messages=messages, temperature=temperature, max_tokens=max_tokens, **kwargs
		)

		# Track usage
		if hasattr(response, 'usage') and response.usage:
			self.total_input_tokens += response.usage.prompt_tokens
			self.total_output_tokens += response.usage.completion_tokens

		if not response.choices or not response.choices[0].message.content:
			raise LLMGenerationError('LLM returned empty response')

		return response.choices[0].message.content

	async def _generate_anthropic(
		self, prompt: str, system_prompt: str | None, web_search: bool, temperature: float, max_tokens: int
	) -> str:
		kwargs = {
			'model': self.model,
			'max_tokens': max_tokens,
			'temperature': temperature,
			'messages': [{'role': 'user', 'content': prompt}],
		}

		if system_prompt:
			kwargs['system'] = system_prompt
		if web_search:
			kwargs['tools'] = [ANTHROPIC_WEB_SEARCH_TOOL]

		response = await self._client.messages.create(**kwargs)

		if hasattr(response, 'usage') and response.usage:
			self.total_input_tokens += response.usage.input_tokens
			self.total_output_tokens += response.usage.output_tokens

		# Web search interleaves tool blocks with text blocks
		text = ''.join(block.text for block in response.content if getattr(block, 'type', None) == 'text')
		if not text:
			raise LLMGenerationError('LLM returned empty response')
		return text

	def get_usage_stats(self) -> dict[str, int]:
		"""Get token usage statistics."""
		return {
			'input_tokens': self.total_input_tokens,
			'output_tokens': self.total_output_tokens,
			'total_tokens': self.total_input_tokens + self.total_output_tokens,
		}


def is_rate_limit_error(error: Exception) -> bool:
	if isinstance(error, RateLimitError):
		return True
	if getattr(error, 'status_code', None) == 429:
		return True
	if type(error).__name__ == 'RateLimitError':
		return True
	response = getattr(error, 'response', None)
	if getattr(response, 'status_code', None) == 429:
		return True
	message = str(error).lower()
	return any(phrase in message for phrase in RATE_LIMIT_PHRASES)
