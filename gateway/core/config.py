"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./gateway.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class NamespaceSettings(BaseModel):
    """Connection details for the dispatch namespace of the execution platform."""

    api_base_url: str = "https://api.cloudflare.com/client/v4"
    account_id: str = ""
    api_token: str = Field(default="", repr=False)
    name: str = "testing"
    # Where an uploaded script is reachable for invocation; ``{script}`` is replaced by its name.
    dispatch_url: str = "https://{script}.dispatch.localhost"
    timeout: float = 30.0


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Tenant Dispatch Gateway"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    namespace: NamespaceSettings = NamespaceSettings()
    logging: LoggingSettings = LoggingSettings()

    template_dir: Path = Path("gateway/web/templates")

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def namespace_name(self) -> str:
        return self.namespace.name


@lru_cache()
def get_settings() -> Settings:
    return Settings()
