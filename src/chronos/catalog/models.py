"""Remote catalog records as returned by CoffeeCup."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True, slots=True)
class RemoteTask:
    id: int
    label: str


@dataclass(frozen=True, slots=True)
class RemoteProject:
    """A project the user is assigned to, with its bookable tasks."""

    id: int
    name: str
    client: int | None = None
    tasks: list[RemoteTask] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class RemoteCustomer:
    id: int
    name: str


class CatalogClient(Protocol):
    """The two remote calls a cache sync needs."""

    def list_my_projects(self) -> list[RemoteProject]: ...

    def list_customers(self) -> list[RemoteCustomer]: ...
