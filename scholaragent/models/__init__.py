from .agent import AgentDescriptor
from .pipeline import MethodologyOption, ReferenceAudit, ResearchTopic
from .reference import UNKNOWN_AUTHOR, UNKNOWN_YEAR, Reference, SourceRecord
from .session import SearchSession

__all__ = [
	'AgentDescriptor',
	'MethodologyOption',
	'Reference',
	'ReferenceAudit',
	'ResearchTopic',
	'SearchSession',
	'SourceRecord',
	'UNKNOWN_AUTHOR',
	'UNKNOWN_YEAR',
]
