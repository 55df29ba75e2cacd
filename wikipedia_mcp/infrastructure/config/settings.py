"""
Configuration settings - Infrastructure component for managing application configuration.
Uses Pydantic for validation and environment variable loading.
"""

from __future__ import annotations
import os
import re
from typing import Annotated, Optional, List, Dict, Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class WikipediaSettings(BaseSettings):
    """Remote provider configuration."""

    model_config = SettingsConfigDict(env_prefix='WIKIPEDIA_', env_file='.env', extra='ignore')

    rest_base_url: str = 'https://en.wikipedia.org/api/rest_v1'
    action_api_url: str = 'https://en.wikipedia.org/w/api.php'
    user_agent: str = 'wikipedia-mcp/1.0 (+https://github.com/modelcontextprotocol)'
    timeout_s: Optional[float] = 30.0
    default_chunk_length: int = 5000
    search_limit: int = 10
    follow_redirects: bool = True

    @field_validator('rest_base_url', 'action_api_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip('/')

    @field_validator('timeout_s', mode='before')
    @classmethod
    def parse_timeout(cls, v):
        """Empty or non-positive values fall back to the transport default."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        try:
            value = float(v)
        except (TypeError, ValueError):
            return 30.0
        return value if value > 0 else None

    @field_validator('default_chunk_length')
    @classmethod
    def validate_chunk_length(cls, v: int) -> int:
        return v if v > 0 else 5000

    @field_validator('search_limit')
    @classmethod
    def validate_search_limit(cls, v: int) -> int:
        return max(1, min(v, 50))


class ServerSettings(BaseSettings):
    """MCP server configuration."""

    model_config = SettingsConfigDict(env_file='.env', extra='ignore')

    name: str = Field('Wikipedia MCP', validation_alias=AliasChoices('MCP_SERVER_NAME', 'name'))

    # Extra plugin directories
    plugin_paths: Annotated[List[str], NoDecode] = Field(
        default_factory=list,
        validation_alias=AliasChoices('WIKIPEDIA_MCP_TOOLS_DIR', 'plugin_paths')
    )

    @field_validator('plugin_paths', mode='before')
    @classmethod
    def parse_plugin_paths(cls, v):
        """Parse plugin paths separated by commas or os.pathsep."""
        if not v:
            return []
        if isinstance(v, str):
            parts = re.split(f"[,{re.escape(os.pathsep)}]", v)
            return [path.strip() for path in parts if path.strip()]
        return list(v)


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(env_file='.env', extra='ignore', case_sensitive=False)

    # Sub-configurations
    wikipedia: WikipediaSettings = Field(default_factory=WikipediaSettings)
    mcp_server: ServerSettings = Field(default_factory=ServerSettings)

    # Logging
    log_level: str = Field('INFO', validation_alias=AliasChoices('LOG_LEVEL', 'log_level'))
    log_format: str = Field(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        validation_alias=AliasChoices('LOG_FORMAT', 'log_format')
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            return 'INFO'
        return v.upper()

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary for serialization."""
        return {
            'wikipedia': self.wikipedia.model_dump(),
            'mcp_server': self.mcp_server.model_dump(),
            'log_level': self.log_level
        }


# Global settings instance
_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """Get global settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Reload settings from environment (for testing)."""
    global _settings
    _settings = AppSettings()
    return _settings
