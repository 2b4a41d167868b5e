from __future__ import annotations

"""Scoped tenant switching.

Contributors that build per-site submenus must look at another tenant's
data for a moment. :meth:`TenantContext.switched` enters that tenant and
always hands the original one back, whatever happens inside the block.
"""

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from .exceptions import TenantSwitchError
from .interfaces import TenantSwitcher

logger = logging.getLogger(__name__)

__all__ = ["TenantContext"]


class TenantContext:
    """Scope guard around a host's paired ``switch_tenant``/``restore_tenant``.

    Args:
        switcher: Host object performing the actual switch.
        on_error: Optional sink for :class:`TenantSwitchError` diagnostics
            (usually ``ToolbarContext.record``).
    """

    def __init__(self, switcher: TenantSwitcher,
                 on_error: Optional[Callable[[TenantSwitchError], None]] = None) -> None:
        self._switcher = switcher
        self._on_error = on_error
        self._depth = 0

    @property
    def current(self) -> Optional[int]:
        return self._switcher.current_tenant_id()

    @property
    def depth(self) -> int:
        """Number of currently open scopes."""
        return self._depth

    @contextmanager
    def switched(self, tenant_id: int) -> Iterator[int]:
        """Switch to *tenant_id* for the duration of the ``with`` block.

        The original tenant is restored on normal exit, early return and
        exceptions; exceptions still propagate. If the switch itself fails
        nothing is restored.
        """
        original = self._switcher.current_tenant_id()
        self._switcher.switch_tenant(tenant_id)
        self._depth += 1
        try:
            yield tenant_id
        finally:
            self._depth -= 1
            self._switcher.restore_tenant()
            self._verify(original)

    def _verify(self, original: Optional[int]) -> None:
        actual = self._switcher.current_tenant_id()
        if actual == original:
            return
        error = TenantSwitchError(original, actual)
        logger.warning("%s", error)
        if self._on_error is not None:
            self._on_error(error)

