from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	# Text generation
	LLM_PROVIDER: str = 'openrouter'
	LLM_API_KEYS: str = ''
	SEARCH_MODEL: str = 'openai/gpt-4o-mini'
	SYNTHESIS_MODEL: str = 'anthropic/claude-3.5-sonnet'
	LLM_TIMEOUT_SECONDS: float = 30.0

	# Search agents
	AGENT_ROSTER: str = 'publishers'
	AGENT_STAGGER_SECONDS: float = 1.5
	RATE_LIMIT_MAX_ATTEMPTS: int = 3
	RATE_LIMIT_BACKOFF_SECONDS: float = 2.0

	# Bibliographic sources
	BIBLIO_TIMEOUT_SECONDS: float = 8.0
	OPENALEX_EMAIL: str | None = None
	CROSSREF_EMAIL: str | None = None
	SEMANTIC_SCHOLAR_API_KEY: str | None = None

	# Validation
	VALIDATION_CONCURRENCY: int | None = None
	KEEP_UNVERIFIED_WITH_DOI: bool = True

	# App Settings
	APP_NAME: str = 'ScholarAgent'
	LOG_LEVEL: str = 'INFO'
	LOG_FILE: Path | None = None

	# Paths
	BASE_DIR: Path = Path(__file__).parent.parent
	CONFIG_DIR: Path = BASE_DIR / 'config'

	model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

	@property
	def api_keys(self) -> list[str]:
		return [key.strip() for key in self.LLM_API_KEYS.split(',') if key.strip()]


settings = Settings()
