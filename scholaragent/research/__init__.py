from .agent_runner import SearchAgentRunner
from .audit import audit_references
from .deduplication import TitleDeduplicator, title_key
from .doi import has_doi_shape, normalize_doi
from .merge import MIN_ABSTRACT_LENGTH, TRUST_ORDER, merge_record, merge_records
from .orchestrator import SearchOrchestrator
from .parsing import ParseResult, extract_json_array, parse_agent_output
from .progress import (
	AgentProgress,
	AgentStatus,
	CollectingProgressListener,
	LoggingProgressListener,
	NullProgressListener,
	ProgressListener,
)
from .quality import QualityPolicy
from .resolver import BibliographicResolver
from .validator import ReferenceValidator

__all__ = [
	'AgentProgress',
	'AgentStatus',
	'BibliographicResolver',
	'CollectingProgressListener',
	'LoggingProgressListener',
	'MIN_ABSTRACT_LENGTH',
	'NullProgressListener',
	'ParseResult',
	'ProgressListener',
	'QualityPolicy',
	'ReferenceValidator',
	'SearchAgentRunner',
	'SearchOrchestrator',
	'TRUST_ORDER',
	'TitleDeduplicator',
	'audit_references',
	'extract_json_array',
	'has_doi_shape',
	'merge_record',
	'merge_records',
	'normalize_doi',
	'parse_agent_output',
	'title_key',
]
