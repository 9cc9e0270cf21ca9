"""Dependency Injection Container for vet case change handling.

This container wires together the bounded contexts:
- Changes Context: snapshot adapter and document change builder
- Case Events Context: interpreter and dispatcher
- Entry points: the document write trigger

Usage:
    from vetcase_events.container import get_container

    container = get_container()
    container.register_input_source_use_case(my_transcription_use_case)
    result = await container.trigger.handle(payload)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

from vetcase_events.config import CaseEventsConfig, configure_logging, load_config

if TYPE_CHECKING:
    from vetcase_events.domains.case_events import (
        CaseChangeInterpreter,
        CaseEventDispatcher,
        ProcessContentRequestUseCase,
        ProcessInputSourceUseCase,
    )
    from vetcase_events.domains.changes import DocumentChangeBuilder, SnapshotAdapter
    from vetcase_events.entrypoints import CaseWriteTrigger

logger = logging.getLogger(__name__)

# Singleton container instance
_container: Optional["ServiceContainer"] = None


@dataclass
class ServiceContainer:
    """Simple dependency injection container for the domain services.

    Services are created lazily on first access and shared afterwards.
    They are stateless, so one container can serve concurrent trigger
    invocations.

    Attributes:
        config: Runtime configuration passed to every service that needs it
    """

    config: CaseEventsConfig = field(default_factory=CaseEventsConfig)

    _snapshot_adapter: Optional["SnapshotAdapter"] = field(default=None, repr=False)
    _builder: Optional["DocumentChangeBuilder"] = field(default=None, repr=False)
    _interpreter: Optional["CaseChangeInterpreter"] = field(default=None, repr=False)
    _dispatcher: Optional["CaseEventDispatcher"] = field(default=None, repr=False)
    _trigger: Optional["CaseWriteTrigger"] = field(default=None, repr=False)

    @property
    def snapshot_adapter(self) -> "SnapshotAdapter":
        """Get the snapshot adapter, bounded by the configured depth."""
        if self._snapshot_adapter is None:
            from vetcase_events.domains.changes import SnapshotAdapter
            self._snapshot_adapter = SnapshotAdapter(
                max_depth=self.config.max_snapshot_depth
            )
        return self._snapshot_adapter

    @property
    def builder(self) -> "DocumentChangeBuilder":
        """Get the document change builder."""
        if self._builder is None:
            from vetcase_events.domains.changes import DocumentChangeBuilder
            self._builder = DocumentChangeBuilder(adapter=self.snapshot_adapter)
        return self._builder

    @property
    def interpreter(self) -> "CaseChangeInterpreter":
        """Get the case change interpreter."""
        if self._interpreter is None:
            from vetcase_events.domains.case_events import CaseChangeInterpreter
            self._interpreter = CaseChangeInterpreter()
        return self._interpreter

    @property
    def dispatcher(self) -> "CaseEventDispatcher":
        """Get the case event dispatcher."""
        if self._dispatcher is None:
            from vetcase_events.domains.case_events import CaseEventDispatcher
            self._dispatcher = CaseEventDispatcher()
        return self._dispatcher

    @property
    def trigger(self) -> "CaseWriteTrigger":
        """Get the vet case document write trigger."""
        if self._trigger is None:
            from vetcase_events.entrypoints import CaseWriteTrigger
            self._trigger = CaseWriteTrigger(
                builder=self.builder,
                interpreter=self.interpreter,
                dispatcher=self.dispatcher,
                config=self.config,
            )
        return self._trigger

    def register_input_source_use_case(
        self, use_case: "ProcessInputSourceUseCase"
    ) -> None:
        """Register the use case that processes newly added input sources."""
        self.dispatcher.input_source_use_case = use_case
        logger.debug("Registered input source use case %s", type(use_case).__name__)

    def register_content_request_use_case(
        self, use_case: "ProcessContentRequestUseCase"
    ) -> None:
        """Register the use case that processes changed content requests."""
        self.dispatcher.content_request_use_case = use_case
        logger.debug("Registered content request use case %s", type(use_case).__name__)


def get_container(config: Optional[CaseEventsConfig] = None) -> ServiceContainer:
    """Get the global service container.

    Args:
        config: Configuration for a newly created container. Ignored once
            the container exists; defaults to ``load_config()``.

    Returns:
        The singleton ServiceContainer instance
    """
    global _container
    if _container is None:
        resolved = config or load_config()
        configure_logging(resolved)
        _container = ServiceContainer(config=resolved)
        logger.info(
            "Created service container for collection %s", resolved.collection_name
        )
    return _container


def reset_container() -> None:
    """Reset the global container (primarily for testing)."""
    global _container
    _container = None
