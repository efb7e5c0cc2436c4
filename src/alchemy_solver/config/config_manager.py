"""Configuration manager using Hydra for hierarchical configuration."""

import os
import logging
from typing import Any, List, Optional, Union
from pathlib import Path
from omegaconf import DictConfig, OmegaConf, open_dict
from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra

from .validators import validate_config

logger = logging.getLogger(__name__)

# Environment variable pointing at an alternative configuration directory
CONFIG_DIR_ENV = "ALCHEMY_SOLVER_CONFIG_DIR"


def default_config_dir() -> Path:
    """Configuration directory from the environment, else ``conf/`` at the project root."""
    env_dir = os.environ.get(CONFIG_DIR_ENV)
    if env_dir:
        return Path(env_dir)
    project_root = Path(__file__).parent.parent.parent.parent
    return project_root / "conf"


class ConfigManager:
    """Manages configuration loading and validation using Hydra."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_dir: Path to configuration directory. If None, uses default.
        """
        if config_dir is None:
            config_dir = default_config_dir()

        self.config_dir = Path(config_dir).resolve()
        self.config: Optional[DictConfig] = None

        if not self.config_dir.exists():
            raise FileNotFoundError(f"Configuration directory not found: {self.config_dir}")

        logger.debug(f"Configuration manager initialized with config_dir: {self.config_dir}")

    def load_config(self,
                    config_name: str = "config",
                    overrides: Optional[List[str]] = None,
                    validate: bool = True) -> DictConfig:
        """Load configuration with optional overrides.

        Args:
            config_name: Name of the main config file (without .yaml)
            overrides: List of overrides such as ``search.algorithm=dfs``
            validate: Whether to validate the configuration

        Returns:
            Loaded and validated configuration
        """
        GlobalHydra.instance().clear()

        try:
            with initialize_config_dir(config_dir=str(self.config_dir), version_base=None):
                cfg = compose(config_name=config_name, overrides=overrides or [])

                if validate:
                    validate_config(cfg)

                self.config = cfg

                logger.info(f"Configuration loaded successfully: {config_name}")
                if overrides:
                    logger.info(f"Applied overrides: {overrides}")

                return cfg

        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            raise

    def save_config(self, output_path: Union[str, Path]) -> None:
        """Save current configuration to a YAML file."""
        if self.config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w') as f:
            OmegaConf.save(self.config, f)

        logger.info(f"Configuration saved to: {output_path}")

    def get_parameter(self, key: str, default: Any = None) -> Any:
        """Get a specific parameter from configuration.

        Args:
            key: Parameter key (supports dot notation, e.g., 'search.algorithm')
            default: Default value if key not found

        Returns:
            Parameter value or default
        """
        if self.config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")

        return OmegaConf.select(self.config, key, default=default)

    def set_parameter(self, key: str, value: Any) -> None:
        """Set a specific parameter in configuration (dot notation)."""
        if self.config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")

        with open_dict(self.config):
            OmegaConf.update(self.config, key, value, merge=False)

        logger.debug(f"Parameter set: {key} = {value}")

    def to_yaml(self, resolve: bool = True) -> str:
        """Render the current configuration as YAML."""
        if self.config is None:
            return ""
        return OmegaConf.to_yaml(self.config, resolve=resolve)


def load_config(config_name: str = "config",
                overrides: Optional[List[str]] = None,
                config_dir: Optional[Union[str, Path]] = None,
                validate: bool = True) -> DictConfig:
    """Load configuration using a fresh config manager.

    Args:
        config_name: Name of the main config file
        overrides: List of configuration overrides
        config_dir: Path to configuration directory
        validate: Whether to validate the configuration

    Returns:
        Loaded configuration
    """
    manager = ConfigManager(config_dir)
    return manager.load_config(config_name, overrides, validate)
