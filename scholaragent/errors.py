class ScholarAgentError(Exception):
	"""Base class for errors raised by scholaragent."""


class ConfigurationError(ScholarAgentError):
	"""Raised at startup when credentials or rosters are missing or invalid."""


class LLMError(ScholarAgentError):
	pass


class RateLimitError(LLMError):
	"""The text-generation service asked us to slow down (HTTP 429)."""


class LLMGenerationError(LLMError):
	pass


class InvalidTransitionError(ScholarAgentError):
	pass


class SynthesisError(ScholarAgentError):
	pass
