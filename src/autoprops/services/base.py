"""BaseService — abstract foundation for all autoprops services.

Every service receives a :class:`Vault` at construction time. The Vault
provides locked read-modify-write access to notes, the host's type
hints and the plugin manager.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from autoprops.infrastructure.vault import Vault

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class ApplyService(BaseService):
            def apply_file(self, path: str) -> ServiceResult:
                with self._vault.edit_frontmatter(...) as edit:
                    ...
    """

    def __init__(self, vault: Vault) -> None:
        self._vault = vault

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Call a plugin hook. No-op if plugins are not initialized.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        pm = self._vault.plugin_manager
        if pm is None:
            return
        try:
            getattr(pm.hook, hook_name)(**payload)
        except Exception:
            logger.debug("Plugin hook failed: %s", hook_name, exc_info=True)
            warnings.append(f"Plugin hook failed: {hook_name}")
