from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from scholaragent.utils.logger import logger


class AgentStatus(Enum):
	IDLE = 'idle'
	SEARCHING = 'searching'
	RETRYING = 'retrying'
	COMPLETED = 'completed'
	ERROR = 'error'


@dataclass(frozen=True)
class AgentProgress:
	agent_name: str
	status: AgentStatus
	found_count: int = 0
	detail: str | None = None


class ProgressListener(Protocol):
	def on_agent_progress(self, progress: AgentProgress) -> None: ...

	def on_validation_progress(self, completed: int, total: int, last_title: str) -> None: ...

	def on_status(self, message: str) -> None: ...


class NullProgressListener:
	def on_agent_progress(self, progress: AgentProgress) -> None:
		pass

	def on_validation_progress(self, completed: int, total: int, last_title: str) -> None:
		pass

	def on_status(self, message: str) -> None:
		pass


class LoggingProgressListener:
	def on_agent_progress(self, progress: AgentProgress) -> None:
		if progress.status == AgentStatus.ERROR:
			logger.warning(f'{progress.agent_name}: failed ({progress.detail})')
		elif progress.status == AgentStatus.COMPLETED:
			logger.info(f'{progress.agent_name}: retrieved {progress.found_count} candidate papers')
		else:
			logger.debug(f'{progress.agent_name}: {progress.status.value}')

	def on_validation_progress(self, completed: int, total: int, last_title: str) -> None:
		percent = round(completed / total * 100) if total else 100
		logger.info(f'Validating: {percent}% ({last_title[:40]})')

	def on_status(self, message: str) -> None:
		logger.info(message)


@dataclass
class CollectingProgressListener:
	agent_events: list[AgentProgress] = field(default_factory=list)
	validation_events: list[tuple[int, int, str]] = field(default_factory=list)
	messages: list[str] = field(default_factory=list)

	def on_agent_progress(self, progress: AgentProgress) -> None:
		self.agent_events.append(progress)

	def on_validation_progress(self, completed: int, total: int, last_title: str) -> None:
		self.validation_events.append((completed, total, last_title))

	def on_status(self, message: str) -> None:
		self.messages.append(message)

	def final_status(self, agent_name: str) -> AgentStatus | None:
		for event in reversed(self.agent_events):
			if event.agent_name == agent_name:
				return event.status
		return None
