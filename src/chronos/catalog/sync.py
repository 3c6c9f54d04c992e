"""Rebuild the project cache from CoffeeCup.

A sync fetches the user's projects and all customers, flattens every
project task into one :class:`CacheEntry` labelled
``"<customer> / <project> / <task>"`` and replaces the cache file. Either fetch
failing aborts the sync before anything is written.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from chronos.catalog.cache import CacheEntry, ProjectCache
from chronos.catalog.client import CatalogError
from chronos.catalog.models import CatalogClient, RemoteCustomer, RemoteProject

logger = logging.getLogger(__name__)

INTERNAL_LABEL = "Internal"
MISSING_CUSTOMER_LABEL = "Missing Customer"


@dataclass(frozen=True, slots=True)
class RemoteFetchError(Exception):
    """A remote call needed for the sync failed; the cache was left untouched."""

    action: str
    reason: str

    def __str__(self) -> str:
        return f"Sync failed [{self.action}]: {self.reason}"


def customer_label(project: RemoteProject, customers: dict[int, RemoteCustomer]) -> str:
    if project.client is None:
        return INTERNAL_LABEL

    customer = customers.get(project.client)
    if customer is None:
        logger.warning(
            "Project refers to an unknown customer",
            extra={"project": project.id, "client": project.client},
        )
        return MISSING_CUSTOMER_LABEL
    return customer.name


def flatten_catalog(
    projects: Iterable[RemoteProject], customers: Iterable[RemoteCustomer]
) -> list[CacheEntry]:
    """One entry per project task, in the order the remote returned them."""

    by_id = {customer.id: customer for customer in customers}

    entries: list[CacheEntry] = []
    for project in projects:
        if not project.tasks:
            continue
        label = customer_label(project, by_id)
        for task in project.tasks:
            entries.append(
                CacheEntry(
                    display=f"{label} / {project.name} / {task.label}",
                    project=project.id,
                    task=task.id,
                )
            )
    return entries


class CacheSynchronizer:
    """Fetch the remote catalog and replace the local project cache.

    Callers must not run two syncs against the same cache at once.
    """

    def __init__(self, *, catalog: CatalogClient, store: ProjectCache) -> None:
        self._catalog = catalog
        self._store = store

    def synchronize(self) -> list[CacheEntry]:
        try:
            projects = self._catalog.list_my_projects()
        except CatalogError as e:
            raise _fetch_error("list projects", e) from e

        try:
            customers = self._catalog.list_customers()
        except CatalogError as e:
            raise _fetch_error("list customers", e) from e

        entries = flatten_catalog(projects, customers)
        self._store.save(entries)

        logger.info(
            "Project cache synchronized",
            extra={
                "projects": len(projects),
                "customers": len(customers),
                "entries": len(entries),
                "path": str(self._store.path),
            },
        )
        return entries


def _fetch_error(action: str, error: CatalogError) -> RemoteFetchError:
    # Keep the client's own step (e.g. "authenticate") when it differs.
    reason = error.reason if error.action == action else f"{error.action}: {error.reason}"
    return RemoteFetchError(action=action, reason=reason)
