"""
Tests for configuration management.

Tests config loading from:
1. Environment variables
2. YAML files
3. Combined (env overrides YAML)
"""

import os

import pytest
import yaml

from memora.config import (
    Config,
    GraphStyleConfig,
    PhysicsConfig,
    RenderOptions,
    ServerConfig,
    StoreConfig,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Clear all existing MEMORA_ env vars."""
    for key in list(os.environ.keys()):
        if key.startswith("MEMORA_"):
            monkeypatch.delenv(key, raising=False)


class TestConfigDefaults:
    """Test default configuration values."""

    def test_default_config_creation(self):
        """Test creating config with defaults."""
        config = Config()

        # Graph style defaults
        assert config.graph.mood_colors["happy"] == "#E8C547"
        assert len(config.graph.mood_colors) == 8
        assert config.graph.neutral_color == "#B6AE9F"
        assert config.graph.dimmed_opacity_day == 0.18
        assert config.graph.dimmed_opacity_coarse == 0.3

        # Renderer defaults
        assert config.renderer.physics.solver == "forceAtlas2Based"
        assert config.renderer.physics.stabilization_iterations == 150
        assert config.renderer.tooltip_delay == 200

        # Store defaults
        assert config.store.backend == "sqlite"
        assert config.store.db_path == "data/memora.db"
        assert config.store.list_limit == 200

        # Server and logging
        assert config.server.port == 8000
        assert config.logging.level == "INFO"
        assert config.debug is False

    def test_graph_style_validation(self):
        """Test dimmed opacity must be in (0, 1]."""
        with pytest.raises(ValueError):
            GraphStyleConfig(dimmed_opacity_day=0.0)

        with pytest.raises(ValueError):
            GraphStyleConfig(dimmed_opacity_coarse=1.5)

    def test_store_list_limit_validation(self):
        with pytest.raises(ValueError):
            StoreConfig(list_limit=0)

    def test_max_sessions_validation(self):
        with pytest.raises(ValueError):
            ServerConfig(max_sessions=0)

    def test_render_options_creation(self):
        """Test creating renderer options."""
        options = RenderOptions(
            physics=PhysicsConfig(enabled=False),
            media_base_url="https://cdn.example.com",
        )

        assert options.physics.enabled is False
        assert options.physics.damping == 0.5
        assert options.media_base_url == "https://cdn.example.com"


class TestConfigFromEnv:
    """Test loading configuration from environment variables."""

    def test_from_env_store(self, monkeypatch):
        """Test loading store config from environment."""
        monkeypatch.setenv("MEMORA_STORE_DB_PATH", "/tmp/memories.db")
        monkeypatch.setenv("MEMORA_STORE_LIST_LIMIT", "50")

        config = Config.from_env()

        assert config.store.db_path == "/tmp/memories.db"
        assert config.store.list_limit == 50

    def test_from_env_with_numbers(self, monkeypatch):
        """Test loading numeric values from environment."""
        monkeypatch.setenv("MEMORA_GRAPH_DIMMED_OPACITY_DAY", "0.25")
        monkeypatch.setenv("MEMORA_PHYSICS_STABILIZATION_ITERATIONS", "300")
        monkeypatch.setenv("MEMORA_PORT", "9000")
        monkeypatch.setenv("MEMORA_MAX_SESSIONS", "5")

        config = Config.from_env()

        assert config.graph.dimmed_opacity_day == 0.25
        assert config.renderer.physics.stabilization_iterations == 300
        assert config.server.port == 9000
        assert config.server.max_sessions == 5

    def test_from_env_with_booleans(self, monkeypatch):
        """Test loading boolean values from environment."""
        monkeypatch.setenv("MEMORA_PHYSICS_ENABLED", "false")
        monkeypatch.setenv("MEMORA_LOG_TO_FILE", "1")
        monkeypatch.setenv("MEMORA_DEBUG", "true")

        config = Config.from_env()

        assert config.renderer.physics.enabled is False
        assert config.logging.log_to_file is True
        assert config.debug is True

    def test_from_env_with_dotenv_file(self, tmp_path):
        """Test loading from .env file."""
        env_file = tmp_path / ".env.test"
        env_file.write_text(
            """
MEMORA_STORE_BACKEND=sqlite
MEMORA_RENDERER_MEDIA_BASE_URL=https://media.example.com
MEMORA_LOG_LEVEL=DEBUG
"""
        )

        config = Config.from_env(env_file=str(env_file))

        assert config.renderer.media_base_url == "https://media.example.com"
        assert config.logging.level == "DEBUG"

        for key in ("MEMORA_STORE_BACKEND", "MEMORA_RENDERER_MEDIA_BASE_URL", "MEMORA_LOG_LEVEL"):
            os.environ.pop(key, None)

    def test_from_env_empty_values_use_defaults(self, monkeypatch):
        """Test that empty values fall back to defaults."""
        monkeypatch.setenv("MEMORA_STORE_DB_PATH", "")

        config = Config.from_env()

        assert config.store.db_path == "data/memora.db"


class TestConfigFromYAML:
    """Test loading configuration from YAML files."""

    def test_from_yaml_basic(self, tmp_path):
        """Test loading config from YAML file."""
        yaml_file = tmp_path / "config.yaml"
        config_data = {
            "graph": {
                "mood_colors": {"happy": "#FFFF00"},
                "dimmed_opacity_day": 0.1,
            },
            "renderer": {"physics": {"spring_length": 200}},
            "store": {"db_path": "custom.db"},
            "debug": True,
        }
        yaml_file.write_text(yaml.dump(config_data))

        config = Config.from_yaml(str(yaml_file))

        assert config.graph.mood_colors == {"happy": "#FFFF00"}
        assert config.graph.dimmed_opacity_day == 0.1
        assert config.renderer.physics.spring_length == 200
        assert config.renderer.physics.damping == 0.5  # default
        assert config.store.db_path == "custom.db"
        assert config.debug is True

    def test_from_yaml_file_not_found(self):
        """Test loading from non-existent file."""
        with pytest.raises(FileNotFoundError):
            Config.from_yaml("/nonexistent/config.yaml")

    def test_from_yaml_invalid_yaml(self, tmp_path):
        """Test loading invalid YAML file."""
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("invalid: yaml: content: [")

        with pytest.raises(yaml.YAMLError):
            Config.from_yaml(str(yaml_file))


class TestConfigFromEnvOrYAML:
    """Test combined loading (env overrides YAML)."""

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        """Test that environment variables override YAML values."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(
            yaml.dump({"store": {"db_path": "yaml.db"}, "server": {"port": 7000}})
        )

        monkeypatch.setenv("MEMORA_STORE_DB_PATH", "env.db")

        config = Config.from_env_or_yaml(yaml_path=str(yaml_file))

        # Environment should win
        assert config.store.db_path == "env.db"
        # YAML value preserved where no env override
        assert config.server.port == 7000

    def test_yaml_only_when_no_env(self, tmp_path):
        """Test YAML values used when no environment variables."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(yaml.dump({"renderer": {"tooltip_delay": 500}}))

        config = Config.from_env_or_yaml(yaml_path=str(yaml_file))

        assert config.renderer.tooltip_delay == 500

    def test_env_only_when_no_yaml(self, monkeypatch):
        """Test environment values used when no YAML file."""
        monkeypatch.setenv("MEMORA_HOST", "127.0.0.1")

        config = Config.from_env_or_yaml(yaml_path="/nonexistent/config.yaml")

        assert config.server.host == "127.0.0.1"
