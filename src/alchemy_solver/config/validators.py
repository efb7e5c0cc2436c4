"""Configuration validation for the alchemy solver."""

import logging
from omegaconf import DictConfig

logger = logging.getLogger(__name__)

VALID_ALGORITHMS = ('bfs', 'dfs', 'bidirectional')
VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_catalog_config(config.get('catalog', {}))
        validate_search_config(config.get('search', {}))
        validate_logging_config(config.get('logging', {}))
    except ConfigValidationError:
        raise
    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}") from e

    logger.debug("Configuration validation passed")


def validate_catalog_config(catalog_config: DictConfig) -> None:
    """Validate catalog configuration section."""
    if not catalog_config:
        return

    path = catalog_config.get('path')
    if path is not None and not isinstance(path, str):
        raise ConfigValidationError(f"catalog.path must be a string, got {path!r}")


def _positive_int(section: DictConfig, key: str, default: int, prefix: str) -> None:
    value = section.get(key, default)
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise ConfigValidationError(f"{prefix}.{key} must be a positive integer, got {value}")


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section.

    Args:
        search_config: Search configuration section
    """
    if not search_config:
        return

    algorithm = str(search_config.get('algorithm', 'bfs')).lower()
    if algorithm not in VALID_ALGORITHMS:
        raise ConfigValidationError(
            f"search.algorithm must be one of {VALID_ALGORITHMS}, got {algorithm}"
        )

    dfs_config = search_config.get('dfs', {})
    if dfs_config:
        _positive_int(dfs_config, 'depth_multiplier', 2, 'search.dfs')

    multipath_config = search_config.get('multipath', {})
    if multipath_config:
        _positive_int(multipath_config, 'max_workers', 4, 'search.multipath')
        _positive_int(multipath_config, 'variant_factor', 2, 'search.multipath')

        if multipath_config.get('max_workers', 4) > 4:
            logger.warning(
                "search.multipath.max_workers above 4 is clamped to 4 concurrent searches"
            )

        stop = multipath_config.get('stop_when_satisfied', True)
        if not isinstance(stop, bool):
            raise ConfigValidationError(
                f"search.multipath.stop_when_satisfied must be boolean, got {stop}"
            )


def validate_logging_config(logging_config: DictConfig) -> None:
    """Validate logging configuration section."""
    if not logging_config:
        return

    level = str(logging_config.get('level', 'WARNING')).upper()
    if level not in VALID_LOG_LEVELS:
        raise ConfigValidationError(
            f"logging.level must be one of {VALID_LOG_LEVELS}, got {level}"
        )
