"""
Configuration management for the Meters service
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Meter source (YAML seed file for the in-memory lookup)
    meter_source_path: str | None = None

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8090
    api_reload: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    # GraphQL
    graphql_path: str = "/graphql"
    graphiql: bool = True

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = True
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "METERS_"
        case_sensitive = False


# Global settings instance
settings = Settings()
