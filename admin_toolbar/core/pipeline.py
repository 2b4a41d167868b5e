from __future__ import annotations

"""Ordered, fault-isolated contributor pipeline.

Contributors are plain callables taking the per-request
:class:`~admin_toolbar.core.context.ToolbarContext`. They are registered once
by the host (static composition) and run once per render pass, lowest
priority first. A contributor that raises is logged and skipped; the ones
after it still run.
"""

import itertools
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Optional

from .exceptions import ContributorFault

if TYPE_CHECKING:
    from .context import ToolbarContext

logger = logging.getLogger(__name__)

__all__ = ["Contributor", "ContributorRegistration", "ContributorPipeline", "DEFAULT_PRIORITY"]

Contributor = Callable[["ToolbarContext"], None]

DEFAULT_PRIORITY = 10


@dataclass(frozen=True)
class ContributorRegistration:
    """A contributor plus its ordering and diagnostic label."""

    callback: Contributor
    priority: int = DEFAULT_PRIORITY
    label: str = ""
    sequence: int = field(default=0, compare=False)

    @property
    def sort_key(self) -> tuple:
        return (self.priority, self.sequence)


class ContributorPipeline:
    """Static list of contributors invoked in priority order."""

    def __init__(self) -> None:
        self._registrations: List[ContributorRegistration] = []
        self._counter = itertools.count()

    def register(self, callback: Contributor, priority: int = DEFAULT_PRIORITY,
                 label: Optional[str] = None) -> ContributorRegistration:
        """Add *callback*; ties in *priority* keep registration order.

        Raises:
            TypeError: If *callback* is not callable.
            ValueError: If *label* is already registered.
        """
        if not callable(callback):
            raise TypeError(f"Contributor must be callable, got {type(callback).__name__}")
        label = label or getattr(callback, "__name__", repr(callback))
        if any(r.label == label for r in self._registrations):
            raise ValueError(f"Contributor '{label}' already registered")

        registration = ContributorRegistration(
            callback=callback,
            priority=int(priority),
            label=label,
            sequence=next(self._counter),
        )
        self._registrations.append(registration)
        logger.debug("Registered contributor '%s' (priority %d)", label, registration.priority)
        return registration

    def contributor(self, priority: int = DEFAULT_PRIORITY,
                    label: Optional[str] = None) -> Callable[[Contributor], Contributor]:
        """Decorator form of :meth:`register`."""
        def decorator(callback: Contributor) -> Contributor:
            self.register(callback, priority=priority, label=label)
            return callback
        return decorator

    def unregister(self, label: str) -> bool:
        for registration in self._registrations:
            if registration.label == label:
                self._registrations.remove(registration)
                logger.debug("Unregistered contributor '%s'", label)
                return True
        return False

    def registrations(self) -> List[ContributorRegistration]:
        """Registrations in the order :meth:`run` invokes them."""
        return sorted(self._registrations, key=lambda r: r.sort_key)

    def __len__(self) -> int:
        return len(self._registrations)

    def run(self, context: "ToolbarContext") -> List[ContributorFault]:
        """Invoke every contributor once against *context*.

        Returns:
            The faults raised by contributors during this run, also
            recorded on ``context.diagnostics``.
        """
        faults: List[ContributorFault] = []
        for registration in self.registrations():
            try:
                registration.callback(context)
            except Exception as exc:
                fault = ContributorFault(registration.label, exc)
                logger.error("Contributor '%s' failed: %s", registration.label, exc, exc_info=True)
                context.record(fault)
                faults.append(fault)
        logger.debug("Pipeline finished: %d contributor(s), %d fault(s)",
                     len(self._registrations), len(faults))
        return faults
