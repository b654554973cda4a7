"""Application configuration"""

from typing import Any, Dict
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # API
    PROJECT_NAME: str = "Pet Owners API"
    VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str = "sqlite:///./petowners.db"

    # Owners
    # WHY: Owners are seed data. The YAML file mirrors the shape of the
    # OWNERS mapping: {"fred": {"name": "Fred", "age": 35, "pets": ["Dino"]}}
    OWNERS_FILE: str = "owners.yml"
    OWNERS: Dict[str, Any] = {}
    SEED_PETS: bool = True

    @property
    def async_database_url(self) -> str:
        """Get async database URL"""
        if self.DATABASE_URL.startswith("postgresql://"):
            return self.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://", 1)
        if self.DATABASE_URL.startswith("sqlite://"):
            return self.DATABASE_URL.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return self.DATABASE_URL


settings = Settings()
