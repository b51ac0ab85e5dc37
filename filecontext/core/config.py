"""
Configuration management via environment variables.

This module loads configuration from .env file using python-dotenv.
All configuration values are accessed through the Settings class, which is
built once at startup and handed explicitly to the services that need it.
"""
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# Load .env file from project root
# This must happen before accessing os.environ
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)

DEFAULT_MAX_CONTEXT_LENGTH = 4000
DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    frozen=True makes the dataclass immutable, preventing accidental
    modification of settings at runtime.

    Attributes:
        app_name: Application identifier for logging
        app_env: Environment name (development, staging, production)
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files (None = logs/ in project root)
        port: Port the HTTP server listens on
        ollama_base_url: Base URL of the local Ollama server
        ollama_model: Model name sent to Ollama
        together_api_key: Bearer credential for Together AI
        together_model: Model name sent to Together AI
        max_context_length: Character budget for the aggregated context
        provider_timeout_seconds: Timeout applied to every provider call
        storage_dir: Directory uploaded files are written to
        max_upload_bytes: Largest accepted upload
        enable_audit_logging: Whether request audit logging is enabled
    """
    # Application settings
    app_name: str = "FileContextServer"
    app_env: str = "development"
    log_level: str = "INFO"
    log_dir: Optional[str] = None
    port: int = 3000

    # LLM settings
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama2"
    together_api_key: str = ""
    together_model: str = "llama2"
    provider_timeout_seconds: float = 60.0

    # Context settings
    max_context_length: int = DEFAULT_MAX_CONTEXT_LENGTH

    # Storage settings
    storage_dir: str = "storage"
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES

    enable_audit_logging: bool = True

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env.lower() == "production"


def _get_env(key: str, default: Optional[str] = None) -> str:
    """
    Get environment variable with optional default.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set and no default provided
    """
    value = os.environ.get(key, default)
    if value is None:
        raise ValueError(
            f"Required environment variable '{key}' is not set. "
            f"Please check your .env file."
        )
    return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are read once at startup; call get_settings.cache_clear()
    to force a re-read (tests do this after patching the environment).

    Returns:
        Settings instance with all configuration values

    Raises:
        ValueError: If a numeric variable cannot be parsed
    """
    # MODEL_NAME is the shared fallback for both providers
    model_name = _get_env("MODEL_NAME", "llama2")

    return Settings(
        # Application
        app_name=_get_env("APP_NAME", "FileContextServer"),
        app_env=_get_env("APP_ENV", "development"),
        log_level=_get_env("LOG_LEVEL", "INFO"),
        log_dir=os.environ.get("LOG_DIR") or None,
        port=int(_get_env("PORT", "3000")),

        # LLM
        ollama_base_url=_get_env("OLLAMA_BASE_URL", "http://localhost:11434").rstrip("/"),
        ollama_model=_get_env("OLLAMA_MODEL", model_name),
        together_api_key=_get_env("TOGETHER_API_KEY", ""),
        together_model=_get_env("TOGETHER_MODEL", model_name),
        provider_timeout_seconds=float(_get_env("PROVIDER_TIMEOUT_SECONDS", "60")),

        # Context
        max_context_length=int(_get_env("MAX_CONTEXT_LENGTH", str(DEFAULT_MAX_CONTEXT_LENGTH))),

        # Storage
        storage_dir=_get_env("STORAGE_DIR", "storage"),
        max_upload_bytes=int(_get_env("MAX_UPLOAD_BYTES", str(DEFAULT_MAX_UPLOAD_BYTES))),

        enable_audit_logging=_get_env("ENABLE_AUDIT_LOGGING", "true").lower() == "true",
    )
