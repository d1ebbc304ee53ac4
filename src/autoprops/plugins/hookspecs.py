"""Pluggy hook specifications for autoprops application events.

Hooks are dispatched synchronously after the document write has
completed, so plugins always observe committed state.
"""

from __future__ import annotations

from typing import Any

import pluggy

hookspec = pluggy.HookspecMarker("autoprops")


class AutopropsHookSpec:
    """Hook specifications for the autoprops plugin system."""

    @hookspec
    def post_apply(
        self,
        path: str,
        properties_added: int,
        changes: list[dict[str, Any]],
    ) -> None:
        """Called after properties were written to a document."""

    @hookspec
    def post_exclude(self, path: str) -> None:
        """Called when a document was skipped by an exclusion rule."""
