"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service runs out of the box on a developer machine, which is the
expected deployment: one editor talking to one local store.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Comment Store")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG", "false")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path of the JSON document holding every comment record.  A
    # relative path is resolved against the project root by the
    # ``storage`` module.
    comments_file: str = os.getenv("COMMENTS_FILE", "comment.json")

    # The editor frontend expects the store on port 3100.
    host: str = os.getenv("COMMENTS_HOST", "0.0.0.0")
    port: int = int(os.getenv("COMMENTS_PORT", "3100"))

    # Comma‑separated list of allowed origins.  ``*`` allows any origin,
    # which is what the editor needs since it is served from another port.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # When true, each load‑modify‑save cycle holds an in‑process lock.
    # Set COMMENTS_SERIALIZE_WRITES=false to get the unlocked behaviour
    # where concurrent writers may lose updates.
    serialize_writes: bool = _env_flag("COMMENTS_SERIALIZE_WRITES", "true")

    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
