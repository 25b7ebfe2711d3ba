"""
Resolving the active compression settings.

Request handling is given a SettingsProvider (or a settings instance)
at startup instead of looking the configuration up itself.
"""

import threading
from typing import Callable, Iterable, Optional

from shared.config import DEFAULT_SECTION_PATH, BaseConfig
from shared.errors import ConfigurationError
from shared.logging import configure_logging, get_logger
from service_compression.app.rules.settings import CompressionSettings
from service_compression.app.sources.documents import ConfigurationSource, source_from_file

logger = get_logger("compression.provider")


def resolve_settings(source: Optional[ConfigurationSource],
                     section_path: str = DEFAULT_SECTION_PATH) -> CompressionSettings:
    """Build settings from the section at ``section_path``, or the defaults when absent.

    Nothing is cached; every call asks the source again.
    """
    if source is None:
        return CompressionSettings.default()

    fragment = source.get_section(section_path)
    if fragment is None:
        logger.debug("No compression section, using defaults", section=section_path)
        return CompressionSettings.default()

    return CompressionSettings.from_fragment(fragment)


def resolve_layered_settings(sources: Iterable[ConfigurationSource],
                             section_path: str = DEFAULT_SECTION_PATH) -> CompressionSettings:
    """Merge the section from every source, outermost first.

    Sources without the section are skipped; with none at all the
    defaults are returned.
    """
    fragments = [source.get_section(section_path) for source in sources]
    return CompressionSettings.from_fragments(*[f for f in fragments if f is not None])


def load_settings(config: BaseConfig) -> CompressionSettings:
    """Resolve settings from the document named by the service configuration."""
    if not config.config_file:
        return CompressionSettings.default()

    source = source_from_file(config.config_file, config.config_format)
    settings = resolve_settings(source, config.section_path)
    logger.info(
        "Compression settings loaded",
        env=config.env,
        config_file=config.config_file,
        section=config.section_path,
        preferred_algorithm=settings.preferred_algorithm.value,
        compression_level=settings.compression_level.value
    )
    return settings


class SettingsProvider:
    """Holds the live settings and replaces them wholesale on reload."""

    def __init__(self, loader: Callable[[], CompressionSettings]):
        self.logger = get_logger("compression.provider")
        self._loader = loader
        self._reload_lock = threading.Lock()
        self._current = loader()

    @classmethod
    def from_config(cls, config: BaseConfig, service_name: str = "compression") -> "SettingsProvider":
        """Configure logging from ``config`` and load settings from its document."""
        configure_logging(service_name, config.log_level)
        return cls(lambda: load_settings(config))

    @property
    def current(self) -> CompressionSettings:
        return self._current

    def __call__(self) -> CompressionSettings:
        return self._current

    def reload(self) -> CompressionSettings:
        """Build fresh settings and swap them in.

        On a configuration error the previous settings stay live and the
        error is re-raised.
        """
        with self._reload_lock:
            try:
                settings = self._loader()
            except ConfigurationError as e:
                self.logger.error("Compression settings reload failed", **e.to_response().model_dump())
                raise
            self._current = settings
            self.logger.info("Compression settings reloaded")
            return settings
