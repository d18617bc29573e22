"""Configuration loading and defaults for gophermech."""

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .types import DEFAULT_PORT


def get_config_dir() -> Path:
    """Get the gophermech config directory (XDG-style)."""
    return Path.home() / ".config" / "gophermech"


def get_config_path() -> Path:
    """Get the config file path."""
    return get_config_dir() / "config.toml"


def get_default_data_dir() -> Path:
    """Get the default data directory for logs."""
    return Path.home() / ".local" / "share" / "gophermech"


def _toml_string(value) -> str:
    """Quote a value as a TOML basic string."""
    # JSON string escapes are valid TOML escapes
    return json.dumps(str(value), ensure_ascii=False)


@dataclass
class ServerConfig:
    """The host name and port the served tree answers to."""

    host: str = "localhost"
    port: int = DEFAULT_PORT


@dataclass
class CacheConfig:
    """Item cache behaviour."""

    enabled: bool = True
    watch: bool = True  # drop cached items when served files change


@dataclass
class Config:
    """Application configuration."""

    root_directory: Path = field(default_factory=lambda: Path.home() / "gopher")
    start_url: str = ""  # empty = root menu of the served tree
    save_directory: Path = field(default_factory=lambda: Path.home() / "Downloads")
    data_directory: Path = field(default_factory=lambda: get_default_data_dir())
    log_level: str = "WARNING"
    server: ServerConfig = field(default_factory=ServerConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)

    def get_log_path(self) -> Path:
        """Get the log file path based on configured data directory."""
        return self.data_directory / "gophermech.log"

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from file or create defaults."""
        config_path = get_config_path()

        config_dir = get_config_dir()
        config_dir.mkdir(parents=True, exist_ok=True)

        if not config_path.exists():
            default_config = cls()
            default_config.data_directory.mkdir(parents=True, exist_ok=True)
            default_config.save()
            return default_config

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        root_dir = data.get("root_directory", "~/gopher")
        save_dir = data.get("save_directory", "~/Downloads")
        data_dir = data.get("data_directory", str(get_default_data_dir()))

        server_data = data.get("server", {})
        server = ServerConfig(
            host=server_data.get("host", "localhost"),
            port=int(server_data.get("port", DEFAULT_PORT)),
        )

        cache_data = data.get("cache", {})
        cache = CacheConfig(
            enabled=cache_data.get("enabled", True),
            watch=cache_data.get("watch", True),
        )

        config = cls(
            root_directory=Path(root_dir).expanduser(),
            start_url=data.get("start_url", ""),
            save_directory=Path(save_dir).expanduser(),
            data_directory=Path(data_dir).expanduser(),
            log_level=str(data.get("log_level", "WARNING")).upper(),
            server=server,
            cache=cache,
        )

        config.data_directory.mkdir(parents=True, exist_ok=True)

        return config

    def save(self) -> None:
        """Save configuration to file."""
        config_path = get_config_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        # tomllib is read-only
        lines = [
            '# gophermech configuration',
            '',
            '# Directory served as the gopher tree',
            f'root_directory = {_toml_string(self.root_directory)}',
            '',
            '# URL to open on start, e.g. "localhost/1/docs" (empty = root menu)',
            f'start_url = {_toml_string(self.start_url)}',
            '',
            '# Where saved items are written',
            f'save_directory = {_toml_string(self.save_directory)}',
            '',
            '# Directory for the log file',
            '# Default: ~/.local/share/gophermech',
            f'data_directory = {_toml_string(self.data_directory)}',
            '',
            '# DEBUG, INFO, WARNING or ERROR',
            f'log_level = {_toml_string(self.log_level)}',
            '',
            '[server]',
            f'host = {_toml_string(self.server.host)}',
            f'port = {self.server.port}',
            '',
            '[cache]',
            f'enabled = {str(self.cache.enabled).lower()}',
            f'watch = {str(self.cache.watch).lower()}  # forget cached items when files change',
        ]

        config_path.write_text("\n".join(lines) + "\n")
