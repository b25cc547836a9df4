"""Configurações da aplicação - carrega variáveis do .env"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",  # carrega local
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===========================================
    # CORE
    # ===========================================
    environment: str = "development"
    debug: bool = False
    timezone: str = "America/Sao_Paulo"

    # ===========================================
    # BANCO DE DADOS
    # ===========================================
    # Produção: PostgreSQL (Supabase/Railway). Local e testes: SQLite.
    database_url: str = "sqlite+aiosqlite:///./casadf.db"
    db_pool_size: int = 10
    db_max_overflow: int = 20

    # ===========================================
    # LOGGING
    # ===========================================
    log_level: str = "INFO"
    log_json: bool = True

    # ===========================================
    # PROPRIEDADES
    # ===========================================
    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    return Settings()
