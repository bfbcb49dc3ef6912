from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	DATABASE_URL: str = 'sqlite+aiosqlite:///./stablecoin_rates.db'

	# Upstream sources
	REQUEST_TIMEOUT_SECONDS: float = 10.0
	BINANCE_P2P_ROWS: int = 10

	# Scheduler
	SCHEDULER_ENABLED: bool = True
	SCHEDULER_TICK_SECONDS: float = 22.0
	SCHEDULER_BATCH_SIZE: int = 10
	SCHEDULER_STAGGER_MS: int = 100
	SCHEDULER_BATCH_DELAY_MS: int = 500
	SCHEDULER_GROUP_DELAY_MS: int = 500

	# Logging
	LOG_LEVEL: str = 'INFO'
	LOG_DIRECTORY: str = 'logs'
	LOG_TO_FILE: bool = False

	# Application
	APP_NAME: str = 'Stablecoin Rates API'
	DEBUG: bool = True
	HOST: str = '0.0.0.0'
	PORT: int = 8000

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
