# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Telemetry infrastructure for gridsync.

Every paginated fetch emits one :class:`PageEvent` per page with the running
record count. Events are logged, counted as an OpenTelemetry metric when
metrics are enabled, and handed to any registered hooks. Events are for
operational visibility only; nothing in a fetch depends on them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, Union, runtime_checkable

# Optional OpenTelemetry imports
try:
    from opentelemetry import metrics

    _OTEL_AVAILABLE = True
except ImportError:
    _OTEL_AVAILABLE = False
    metrics = None  # type: ignore

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration
# ============================================================================


@dataclass(frozen=True)
class TelemetryConfig:
    """Configuration for page-level telemetry.

    Telemetry is opt-in. Without a config, page events are still written to the
    module logger at DEBUG level and nowhere else.

    Example:
        Log every page at INFO::

            config = GridSyncConfig(
                telemetry=TelemetryConfig(enable_logging=True, log_level="INFO")
            )

        Custom hook::

            config = GridSyncConfig(
                telemetry=TelemetryConfig(hooks=[MyPageCounter()])
            )
    """

    enable_logging: bool = False
    enable_metrics: bool = False

    log_level: str = "INFO"
    logger_name: str = "gridsync"

    hooks: List["TelemetryHook"] = field(default_factory=list)


# ============================================================================
# Context Objects
# ============================================================================


@dataclass(frozen=True)
class PageEvent:
    """One fetched page of a paginated request."""

    source: str  # "tables" or "jobs"
    endpoint: str
    page_number: int  # 1-based
    page_size: int  # records on this page
    total: int  # records fetched so far, this page included


# ============================================================================
# Hook Protocol
# ============================================================================


@runtime_checkable
class TelemetryHook(Protocol):
    """Protocol for custom telemetry hooks.

    Example:
        class StatsdHook:
            def __init__(self, statsd):
                self.statsd = statsd

            def on_page(self, event: PageEvent) -> None:
                self.statsd.incr(f"gridsync.{event.source}.records", event.page_size)
    """

    def on_page(self, event: PageEvent) -> None:
        """Called after each page has been received and parsed."""
        ...


# ============================================================================
# Telemetry Manager
# ============================================================================


class TelemetryManager:
    """Dispatches page events to the logger, metrics and hooks.

    This class is internal and not part of the public API.
    """

    def __init__(self, config: Optional[TelemetryConfig] = None) -> None:
        self._config = config or TelemetryConfig()
        self._logger: Optional[logging.Logger] = None
        self._hooks = list(self._config.hooks)
        self._record_count: Optional[Any] = None
        self._page_count: Optional[Any] = None
        self._initialize()

    @property
    def is_metrics_enabled(self) -> bool:
        """Check if metrics are enabled and available."""
        return self._config.enable_metrics and _OTEL_AVAILABLE

    def _initialize(self) -> None:
        if self.is_metrics_enabled:
            meter = metrics.get_meter("gridsync")
            self._record_count = meter.create_counter(
                name="gridsync.fetch.records",
                description="Number of records received from paginated endpoints",
                unit="1",
            )
            self._page_count = meter.create_counter(
                name="gridsync.fetch.pages",
                description="Number of pages received from paginated endpoints",
                unit="1",
            )

        if self._config.enable_logging:
            self._logger = logging.getLogger(self._config.logger_name)
            self._logger.setLevel(getattr(logging, self._config.log_level.upper()))

    def record_page(self, event: PageEvent) -> None:
        if self._logger:
            self._logger.info(
                "%s page %d from %s: %d records (%d total)",
                event.source,
                event.page_number,
                event.endpoint,
                event.page_size,
                event.total,
            )

        if self._record_count is not None:
            attributes = {"source": event.source, "endpoint": event.endpoint}
            self._record_count.add(event.page_size, attributes)
            self._page_count.add(1, attributes)

        for hook in self._hooks:
            if hasattr(hook, "on_page"):
                try:
                    hook.on_page(event)
                except Exception:
                    # Hooks should not break fetches
                    logger.debug("Telemetry hook %r failed", hook, exc_info=True)


# ============================================================================
# No-op Manager for when telemetry is disabled
# ============================================================================


class NoOpTelemetryManager:
    """Telemetry manager used when no telemetry is configured."""

    def record_page(self, event: PageEvent) -> None:
        logger.debug(
            "%s page %d from %s: %d records (%d total)",
            event.source,
            event.page_number,
            event.endpoint,
            event.page_size,
            event.total,
        )


def create_telemetry_manager(
    config: Optional[TelemetryConfig],
) -> Union[TelemetryManager, NoOpTelemetryManager]:
    """Factory to create appropriate telemetry manager."""
    if config is None:
        return NoOpTelemetryManager()

    if not (config.enable_metrics or config.enable_logging or config.hooks):
        return NoOpTelemetryManager()

    return TelemetryManager(config)


__all__ = [
    "TelemetryConfig",
    "TelemetryHook",
    "TelemetryManager",
    "NoOpTelemetryManager",
    "PageEvent",
    "create_telemetry_manager",
]
