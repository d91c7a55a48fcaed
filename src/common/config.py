"""Configuration loading for the media insights pipeline.

Non-secret settings come from ``configs/{name}.yaml``; service URLs and
credentials come from the environment (optionally via a ``.env`` file).
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar, Callable, Generic, Mapping

import yaml
from dotenv import load_dotenv

load_dotenv()

T = TypeVar('T')

ROOT = Path(__file__).resolve().parents[2]
CONFIG_DIR = ROOT / "configs"
CONFIG_ENV_VAR = "PIPELINE_CONFIG"


@dataclass
class AuthConfig:
    domain: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    audience: str | None = None
    timeout: float = 10.0


@dataclass
class AnalysisConfig:
    base_url: str | None = None
    analytics_type: str = "media-insights"
    granularity: str = "article"
    timeout: float = 120.0


@dataclass
class ManuscriptConfig:
    base_url: str | None = None
    timeout: float = 30.0


@dataclass
class IngestConfig:
    max_items_per_source: int = 10
    request_timeout: float = 10.0


@dataclass
class RetryConfig:
    max_retries: int = 3
    initial_delay: float = 1.0


@dataclass
class EventsConfig:
    base_url: str = "http://data.gdeltproject.org/events"
    actor_country_code: str = "UKR"
    geo_country_code: str = "UP"
    timeout: float = 60.0


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 3000


@dataclass
class SourceListConfig:
    name: str
    path: str


@dataclass
class AppConfig:
    auth: AuthConfig = field(default_factory=AuthConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    manuscript: ManuscriptConfig = field(default_factory=ManuscriptConfig)
    ingest: IngestConfig = field(default_factory=IngestConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    events: EventsConfig = field(default_factory=EventsConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    source_lists: list[SourceListConfig] = field(default_factory=list)
    check_previous_analyses: bool = True

    def source_list_path(self, source_list: SourceListConfig) -> Path:
        """Resolve a source list path relative to the repository root."""
        path = Path(source_list.path)
        return path if path.is_absolute() else ROOT / path


def find_config_path(
    config_name: str | None,
    config_dir: Path,
    default_name: str = "prod",
    env_var: str | None = None,
) -> Path:
    """Find config file path, checking env var and defaults.

    Args:
        config_name: Name of config (without .yaml) or None for default
        config_dir: Directory containing config files
        default_name: Default config name if config_name is None
        env_var: Environment variable to check for config name

    Returns:
        Path to the config file

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    if config_name is None:
        config_name = os.environ.get(env_var, default_name) if env_var else default_name

    config_path = config_dir / f"{config_name}.yaml"
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    return config_path


def load_yaml(path: Path) -> dict:
    """Load YAML file and return dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_config(config_name: str | None = None, config_dir: Path = CONFIG_DIR) -> AppConfig:
    """Load configuration from YAML file and environment.

    Args:
        config_name: Name of config file (without .yaml extension).
                    If None, uses PIPELINE_CONFIG env var or "prod".
        config_dir: Directory containing config files

    Returns:
        Loaded AppConfig object
    """
    path = find_config_path(config_name, config_dir, env_var=CONFIG_ENV_VAR)
    return parse_config(load_yaml(path), os.environ)


def parse_config(data: dict, env: Mapping[str, str]) -> AppConfig:
    """Parse config dictionary and environment into AppConfig object."""
    auth_raw = data.get("auth", {})
    auth = AuthConfig(
        domain=env.get("AUTH0_DOMAIN"),
        client_id=env.get("AUTH0_CLIENT_ID"),
        client_secret=env.get("AUTH0_CLIENT_SECRET"),
        audience=env.get("AUTH0_AUDIENCE"),
        timeout=auth_raw.get("timeout", 10.0),
    )

    analysis_raw = data.get("analysis", {})
    analysis = AnalysisConfig(
        base_url=env.get("CORE_BASE_URL"),
        analytics_type=analysis_raw.get("analytics_type", "media-insights"),
        granularity=analysis_raw.get("granularity", "article"),
        timeout=analysis_raw.get("timeout", 120.0),
    )

    manuscript = ManuscriptConfig(
        base_url=env.get("MANUSCRIPT_MGMT_BASE"),
        timeout=data.get("manuscript", {}).get("timeout", 30.0),
    )

    ingest_raw = data.get("ingest", {})
    ingest = IngestConfig(
        max_items_per_source=ingest_raw.get("max_items_per_source", 10),
        request_timeout=ingest_raw.get("request_timeout", 10.0),
    )

    retry_raw = data.get("retry", {})
    retry = RetryConfig(
        max_retries=retry_raw.get("max_retries", 3),
        initial_delay=retry_raw.get("initial_delay", 1.0),
    )

    events_raw = data.get("events", {})
    events = EventsConfig(
        base_url=events_raw.get("base_url", "http://data.gdeltproject.org/events"),
        actor_country_code=events_raw.get("actor_country_code", "UKR"),
        geo_country_code=events_raw.get("geo_country_code", "UP"),
        timeout=events_raw.get("timeout", 60.0),
    )

    server_raw = data.get("server", {})
    server = ServerConfig(
        host=server_raw.get("host", "0.0.0.0"),
        port=server_raw.get("port", 3000),
    )

    source_lists = [
        SourceListConfig(name=item["name"], path=item["path"])
        for item in data.get("source_lists", [])
    ]

    return AppConfig(
        auth=auth,
        analysis=analysis,
        manuscript=manuscript,
        ingest=ingest,
        retry=retry,
        events=events,
        server=server,
        source_lists=source_lists,
        check_previous_analyses=data.get("check_previous_analyses", True),
    )


class ConfigSingleton(Generic[T]):
    """Generic config singleton manager.

    Provides get/set/reset pattern for managing a global config instance.

    Example:
        >>> _manager = ConfigSingleton(load_config)
        >>> get_config = _manager.get
    """

    def __init__(self, loader: Callable[[], T] | None = None):
        self._config: T | None = None
        self._loader = loader

    def get(self) -> T:
        """Get the config, loading it lazily if needed."""
        if self._config is None:
            if self._loader is None:
                raise RuntimeError("No config loaded and no loader set")
            self._config = self._loader()
        return self._config

    def set(self, config: T) -> None:
        """Set the config directly."""
        self._config = config

    def reset(self) -> None:
        """Reset the config, forcing reload on next get()."""
        self._config = None


_manager: ConfigSingleton[AppConfig] = ConfigSingleton(load_config)
get_config = _manager.get
set_config = _manager.set
reset_config = _manager.reset
