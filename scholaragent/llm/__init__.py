from .client import LLMClient, LLMProvider, TextGenerator
from .credentials import AgentPurpose, LLMClientFactory, select_shard

__all__ = [
	'AgentPurpose',
	'LLMClient',
	'LLMClientFactory',
	'LLMProvider',
	'TextGenerator',
	'select_shard',
]
