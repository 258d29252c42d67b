"""
Configuration for Memora.

Supports loading from:
1. Environment variables (highest priority)
2. YAML config file
3. Default values (fallback)
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


def _default_mood_colors() -> dict[str, str]:
    return {
        "happy": "#E8C547",
        "nostalgic": "#B8A9C9",
        "peaceful": "#A3B5A0",
        "excited": "#E8915A",
        "grateful": "#D4A59A",
        "reflective": "#7BA0C4",
        "bittersweet": "#C4A3B0",
        "adventurous": "#D4B778",
    }


class GraphStyleConfig(BaseModel):
    """Visual encoding used by the graph builder."""

    # Colors
    mood_colors: dict[str, str] = Field(default_factory=_default_mood_colors)
    neutral_color: str = "#B6AE9F"
    month_border_color: str = "#9A9285"
    year_border_color: str = "#7D756A"
    highlight_color: str = "#FBF3D1"

    # Day-level sizing
    photo_node_size: float = 30
    text_node_size: float = 22

    # Coarse sizing: base + min(count * per_item, cap)
    month_base_size: float = 20
    month_size_per_item: float = 4
    month_size_cap: float = 30
    year_base_size: float = 30
    year_size_per_item: float = 3
    year_size_cap: float = 40

    # Borders
    day_border_width: float = 2
    month_border_width: float = 3
    year_border_width: float = 4

    # Filter de-emphasis
    dimmed_opacity_day: float = Field(default=0.18, gt=0.0, le=1.0)
    dimmed_opacity_coarse: float = Field(default=0.3, gt=0.0, le=1.0)
    dimmed_border_width: float = 0.0

    # Edges
    day_edge_width: float = 1.5
    month_edge_width: float = 2
    year_edge_width: float = 3
    same_day_edge_width: float = 1
    day_edge_opacity: float = 0.3
    month_edge_opacity: float = 0.4
    year_edge_opacity: float = 0.5
    same_day_edge_opacity: float = 0.4
    dimmed_edge_opacity_factor: float = Field(default=0.3, gt=0.0, le=1.0)
    dimmed_edge_width_factor: float = Field(default=0.5, gt=0.0, le=1.0)


class PhysicsConfig(BaseModel):
    """Force-directed layout parameters handed to the renderer untouched."""

    enabled: bool = True
    solver: str = "forceAtlas2Based"
    gravitational_constant: float = -40
    central_gravity: float = 0.008
    spring_length: float = 120
    spring_constant: float = 0.04
    damping: float = 0.5
    stabilization_iterations: int = 150


class RenderOptions(BaseModel):
    """Renderer options configured by the caller, never by the graph builder."""

    physics: PhysicsConfig = Field(default_factory=PhysicsConfig)
    hover: bool = True
    tooltip_delay: int = 200
    zoom_view: bool = True
    drag_view: bool = True
    fit_animation_ms: int = 800
    media_base_url: str = "http://localhost:5000"


class StoreConfig(BaseModel):
    """Memory store configuration."""

    backend: str = "sqlite"
    db_path: str = "data/memora.db"
    list_limit: int = Field(default=200, ge=1)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"
    file_rotation: str = "10 MB"
    file_retention: str = "7 days"
    compression: str = "zip"
    serialize: bool = True


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = "0.0.0.0"
    port: int = 8000
    max_sessions: int = Field(default=100, ge=1)


class Config(BaseModel):
    """Main configuration."""

    graph: GraphStyleConfig = Field(default_factory=GraphStyleConfig)
    renderer: RenderOptions = Field(default_factory=RenderOptions)
    store: StoreConfig = Field(default_factory=StoreConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    debug: bool = False

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """
        Load configuration from environment variables.

        Priority: .env file -> system environment variables -> defaults

        Args:
            env_file: Optional path to .env file (default: .env in project root)

        Returns:
            Config instance

        Environment variables:
            MEMORA_STORE_BACKEND: Memory store backend (sqlite)
            MEMORA_STORE_DB_PATH: SQLite database path
            MEMORA_STORE_LIST_LIMIT: Max memories fetched per view load
            MEMORA_GRAPH_DIMMED_OPACITY_DAY: Opacity of non-matching day nodes
            MEMORA_GRAPH_DIMMED_OPACITY_COARSE: Opacity of non-matching month/year nodes
            MEMORA_RENDERER_MEDIA_BASE_URL: Prefix for photo URLs
            MEMORA_PHYSICS_ENABLED: Enable force-directed physics
            MEMORA_LOG_LEVEL: Log level
            MEMORA_HOST / MEMORA_PORT: Server bind address
            MEMORA_MAX_SESSIONS: Open network sessions kept before evicting the oldest
            MEMORA_DEBUG: Debug mode
        """
        if env_file:
            load_dotenv(env_file)
        elif Path(".env").exists():
            load_dotenv()

        def get_env(key: str, default: Any = None) -> Any:
            """Get environment variable with type conversion."""
            value = os.getenv(key)
            if value is None:
                return default
            if value == "":
                return default
            if isinstance(default, bool):
                return str(value).lower() in ("true", "1", "yes")
            if isinstance(default, int):
                return int(value)
            if isinstance(default, float):
                return float(value)
            return value

        return cls(
            graph=GraphStyleConfig(
                dimmed_opacity_day=get_env("MEMORA_GRAPH_DIMMED_OPACITY_DAY", 0.18),
                dimmed_opacity_coarse=get_env("MEMORA_GRAPH_DIMMED_OPACITY_COARSE", 0.3),
            ),
            renderer=RenderOptions(
                media_base_url=get_env("MEMORA_RENDERER_MEDIA_BASE_URL", "http://localhost:5000"),
                physics=PhysicsConfig(
                    enabled=get_env("MEMORA_PHYSICS_ENABLED", True),
                    stabilization_iterations=get_env(
                        "MEMORA_PHYSICS_STABILIZATION_ITERATIONS", 150
                    ),
                ),
            ),
            store=StoreConfig(
                backend=get_env("MEMORA_STORE_BACKEND", "sqlite"),
                db_path=get_env("MEMORA_STORE_DB_PATH", "data/memora.db"),
                list_limit=get_env("MEMORA_STORE_LIST_LIMIT", 200),
            ),
            logging=LoggingConfig(
                level=get_env("MEMORA_LOG_LEVEL", "INFO"),
                log_to_file=get_env("MEMORA_LOG_TO_FILE", False),
                log_dir=get_env("MEMORA_LOG_DIR", "logs"),
                file_rotation=get_env("MEMORA_LOG_FILE_ROTATION", "10 MB"),
                file_retention=get_env("MEMORA_LOG_FILE_RETENTION", "7 days"),
                compression=get_env("MEMORA_LOG_COMPRESSION", "zip"),
                serialize=get_env("MEMORA_LOG_SERIALIZE", True),
            ),
            server=ServerConfig(
                host=get_env("MEMORA_HOST", "0.0.0.0"),
                port=get_env("MEMORA_PORT", 8000),
                max_sessions=get_env("MEMORA_MAX_SESSIONS", 100),
            ),
            debug=get_env("MEMORA_DEBUG", False),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            yaml.YAMLError: If YAML is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    @classmethod
    def from_env_or_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str | Path | None = None
    ) -> "Config":
        """
        Load configuration with priority: env vars > YAML > defaults.

        Args:
            yaml_path: Optional path to YAML config
            env_file: Optional path to .env file

        Returns:
            Config instance
        """
        if yaml_path and Path(yaml_path).exists():
            with open(yaml_path) as f:
                config_dict = yaml.safe_load(f) or {}
        else:
            config_dict = {}

        env_config = cls.from_env(env_file=env_file)

        final_dict = {**config_dict}

        # Apply env overrides (non-default values)
        default = cls()
        if env_config.graph != default.graph:
            final_dict["graph"] = env_config.graph.model_dump()
        if env_config.renderer != default.renderer:
            final_dict["renderer"] = env_config.renderer.model_dump()
        if env_config.store != default.store:
            final_dict["store"] = env_config.store.model_dump()
        if env_config.logging != default.logging:
            final_dict["logging"] = env_config.logging.model_dump()
        if env_config.server != default.server:
            final_dict["server"] = env_config.server.model_dump()
        if env_config.debug != default.debug:
            final_dict["debug"] = env_config.debug

        return cls(**final_dict) if final_dict else env_config


# Default config instance
default_config = Config()
