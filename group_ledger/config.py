from decimal import Decimal
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings, read from GROUP_LEDGER_* environment variables"""
    model_config = SettingsConfigDict(env_prefix="GROUP_LEDGER_", env_file=".env", extra="ignore")

    money_precision: Decimal = Decimal("0.01")
    balance_tolerance: Decimal = Decimal("0.01")
    strict_split_validation: bool = False

    secret_key: str = "your_secret_key"
    jwt_algorithm: str = "HS256"

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance"""
    return Settings()
