from pathlib import Path
from typing import Any

import yaml

from scholaragent.config.settings import settings
from scholaragent.errors import ConfigurationError
from scholaragent.models import AgentDescriptor

AGENTS_FILE = 'agents.yaml'


class ConfigLoader:
	def __init__(self, config_dir: Path | str | None = None):
		self.config_dir = Path(config_dir) if config_dir else settings.CONFIG_DIR
		self.rosters = self._load_rosters()

	def _load_rosters(self) -> dict[str, Any]:
		agents_path = self.config_dir / AGENTS_FILE

		if not agents_path.exists():
			raise ConfigurationError(f'Agent roster file not found: {agents_path}')

		with open(agents_path) as f:
			rosters = yaml.safe_load(f) or {}

		if not isinstance(rosters, dict):
			raise ConfigurationError(f'{agents_path} must map roster names to agent lists')
		return rosters

	def roster_names(self) -> list[str]:
		return list(self.rosters)

	def get_roster(self, name: str) -> list[AgentDescriptor]:
		entries = self.rosters.get(name)
		if not entries:
			raise ConfigurationError(f'Unknown or empty agent roster: {name}')

		roster = []
		for entry in entries:
			try:
				roster.append(
					AgentDescriptor(
						name=entry['name'],
						focus_constraint=entry['focus_constraint'].strip(),
						preprint_aware=bool(entry.get('preprint_aware', False)),
						role=entry.get('role'),
					)
				)
			except (KeyError, TypeError, AttributeError) as e:
				raise ConfigurationError(f'Invalid agent entry in roster "{name}": {entry!r}') from e
		return roster


# Singleton instance
_config = None


def get_config() -> ConfigLoader:
	global _config
	if _config is None:
		_config = ConfigLoader()
	return _config
