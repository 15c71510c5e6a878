import yaml
import os
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///./mentor_match.db"
    echo: bool = False


class EmbeddingConfig(BaseModel):
    """Embedding provider settings. A missing or placeholder key disables semantic matching."""
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: str = "text-embedding-3-small"
    dimensions: Optional[int] = None
    timeout_seconds: float = 30.0
    max_retries: int = 4  # Total attempts per embedding call, including the first

    # In-process embedding cache
    cache_ttl_seconds: int = 24 * 60 * 60
    cache_max_items: int = 2000


class MatchingConfig(BaseModel):
    """
    Mentor matching configuration.
    """
    default_mode: str = "local"  # "local", "openai" or "hybrid"
    max_concurrent_embeddings: int = 8  # Upper bound on in-flight provider calls per request


class WebConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    embedding: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    web: WebConfig = Field(default_factory=WebConfig)


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    if not isinstance(data.get(name), dict):
        data[name] = {}
    return data[name]


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from root), try the repo root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

    # Allow env var override for DB URL
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        _section(data, 'database')['url'] = env_db_url

    # Allow env var override for the default matching mode
    env_mode = os.environ.get("MATCHING_MODE")
    if env_mode:
        _section(data, 'matching')['default_mode'] = env_mode

    # Allow env var overrides for the embedding provider
    env_embedding = {
        'OPENAI_API_KEY': 'api_key',
        'OPENAI_BASE_URL': 'base_url',
        'OPENAI_EMBED_MODEL': 'model',
        'EMBED_CACHE_TTL_SECONDS': 'cache_ttl_seconds',
        'EMBED_CACHE_MAX_ITEMS': 'cache_max_items',
    }
    for env_name, field_name in env_embedding.items():
        value = os.environ.get(env_name)
        if value:
            _section(data, 'embedding')[field_name] = value

    # Allow env var overrides for the web server
    env_host = os.environ.get("WEB_HOST")
    if env_host:
        _section(data, 'web')['host'] = env_host
    env_port = os.environ.get("WEB_PORT")
    if env_port:
        _section(data, 'web')['port'] = env_port

    return AppConfig(**data)
