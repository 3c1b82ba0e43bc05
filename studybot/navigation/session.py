"""Per-user resolution of the selected bucket into a merged file list.

A user may change the selection while a storage listing for the previous
bucket is still in flight.  Every request is tagged with the bucket it was
issued for and a generation number; a result is applied only if both still
match the active selection, otherwise it is dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from ..catalog import Catalog, FileResource, ResourceBucket
from ..storage.resolver import StorageResolver
from .merge import merge_files
from .state import Action, NavigationState, SelectionState

logger = logging.getLogger(__name__)

SESSION_KEY = "resource_session"


@dataclass
class ResourceSession:
    catalog: Catalog
    resolver: StorageResolver
    navigation: NavigationState
    files: List[FileResource] = field(default_factory=list)
    loaded_bucket: Optional[ResourceBucket] = None
    _generation: int = 0

    @classmethod
    def for_user(
        cls,
        user_data: Dict,
        catalog: Catalog,
        resolver: StorageResolver,
        *,
        strict: bool = False,
    ) -> "ResourceSession":
        """Return the session kept in ``user_data``, creating it on first use."""

        session = user_data.get(SESSION_KEY)
        if not isinstance(session, cls):
            session = cls(catalog, resolver, NavigationState(user_data, strict=strict))
            user_data[SESSION_KEY] = session
        return session

    # ------------------------------------------------------------------
    @property
    def state(self) -> SelectionState:
        return self.navigation.state

    @property
    def active_bucket(self) -> Optional[ResourceBucket]:
        return self.state.bucket

    @property
    def generation(self) -> int:
        return self._generation

    def dispatch(self, action: Action) -> SelectionState:
        """Apply a selection change; drop files that belong to another bucket."""
        return self._apply(lambda: self.navigation.dispatch(action))

    def back_one(self) -> SelectionState:
        """Clear the deepest selected level."""
        return self._apply(self.navigation.back_one)

    def _apply(self, change: Callable[[], SelectionState]) -> SelectionState:
        before = self.active_bucket
        new_state = change()
        if new_state.bucket != before:
            self._generation += 1
            if self.loaded_bucket != new_state.bucket:
                self.files = []
                self.loaded_bucket = None
        return new_state

    async def refresh(self) -> List[FileResource]:
        """Resolve the active bucket and merge it with the catalog.

        Returns the files currently on display, which are the previous ones
        when this response turned out to be stale.
        """

        bucket = self.active_bucket
        if bucket is None:
            self.files = []
            self.loaded_bucket = None
            return self.files

        self._generation += 1
        generation = self._generation
        storage_files = await self.resolver.list_bucket_files(*bucket)

        if bucket != self.active_bucket or generation != self._generation:
            logger.debug(
                "dropping stale listing for %s (generation %d, current %d)",
                bucket,
                generation,
                self._generation,
            )
            return self.files

        self.files = merge_files(self.catalog.files_for(*bucket), storage_files)
        self.loaded_bucket = bucket
        return self.files


__all__ = ["SESSION_KEY", "ResourceSession"]
