"""CoffeeCup REST client.

Keeps HTTP calls out of CLI and sync code. Every failure (transport, status or
payload shape) surfaces as :class:`CatalogError`; nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import requests

from chronos.catalog.models import RemoteCustomer, RemoteProject, RemoteTask

if TYPE_CHECKING:
    from chronos.booking.draft import BookingDraft

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30


@dataclass(frozen=True, slots=True)
class CatalogError(Exception):
    """A CoffeeCup call failed."""

    action: str
    reason: str

    def __str__(self) -> str:
        return f"Error in communication with CoffeeCup [{self.action}]: {self.reason}"


class CoffeeCupClient:
    """Small wrapper around the CoffeeCup API for the calls chronos needs."""

    def __init__(
        self,
        *,
        user_name: str,
        password: str,
        base_url: str = "https://api.coffeecup.app",
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        if not user_name:
            raise ValueError("CoffeeCup user name is required")

        self._user_name = user_name
        self._password = password
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/json",
                "User-Agent": "chronos",
            }
        )
        self._authenticated = False

    def close(self) -> None:
        self._session.close()

    def authenticate(self) -> None:
        """Exchange user name and password for a bearer token."""

        data = self._request(
            "POST",
            "oauth2/token",
            action="authenticate",
            data={
                "grant_type": "password",
                "username": self._user_name,
                "password": self._password,
            },
        )
        token = data.get("access_token")
        if not isinstance(token, str) or not token:
            raise CatalogError(action="authenticate", reason="response is missing access_token")

        self._session.headers["Authorization"] = f"Bearer {token}"
        self._authenticated = True
        logger.info("Authenticated with CoffeeCup", extra={"user_name": self._user_name})

    def list_my_projects(self) -> list[RemoteProject]:
        """Projects assigned to the authenticated user, tasks included."""

        data = self._authorized_get(
            "v1/projects", action="list projects", params={"assigned": "me", "include": "tasks"}
        )
        return [_parse_project(item) for item in _unwrap(data, "projects", "list projects")]

    def list_customers(self) -> list[RemoteCustomer]:
        data = self._authorized_get("v1/clients", action="list customers")
        return [_parse_customer(item) for item in _unwrap(data, "clients", "list customers")]

    def create_time_entry(self, draft: BookingDraft) -> int:
        """Submit a complete draft; returns the new time entry's id."""

        draft.require_complete()
        assert draft.duration is not None

        if not self._authenticated:
            self.authenticate()

        payload: dict[str, Any] = {
            "project": draft.project,
            "task": draft.task,
            "day": draft.day.isoformat(),
            "duration": draft.duration * 60,
            "comment": draft.comment or "",
        }
        if draft.reference:
            payload["reference"] = draft.reference

        data = self._request(
            "POST", "v1/timeEntries", action="create time entry", json={"timeEntry": payload}
        )
        entry = data.get("timeEntry")
        entry_id = entry.get("id") if isinstance(entry, dict) else None
        if not isinstance(entry_id, int):
            raise CatalogError(action="create time entry", reason="response is missing id")

        logger.info(
            "Time entry created",
            extra={"time_entry": entry_id, "project": draft.project, "task": draft.task},
        )
        return entry_id

    def _authorized_get(
        self, path: str, *, action: str, params: dict[str, str] | None = None
    ) -> Any:
        if not self._authenticated:
            self.authenticate()
        return self._request("GET", path, action=action, params=params)

    def _request(self, method: str, path: str, *, action: str, **kwargs: Any) -> Any:
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            resp = self._session.request(method, url, timeout=self._timeout, **kwargs)
            resp.raise_for_status()
            return resp.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            raise CatalogError(action=action, reason=f"HTTP {status} from {url}") from e
        except requests.JSONDecodeError as e:
            raise CatalogError(action=action, reason=f"invalid JSON from {url}") from e
        except requests.RequestException as e:
            raise CatalogError(action=action, reason=str(e)) from e


def _unwrap(data: Any, key: str, action: str) -> list[dict[str, Any]]:
    items = data.get(key) if isinstance(data, dict) else data
    if not isinstance(items, list):
        raise CatalogError(action=action, reason=f"response is missing {key!r} list")
    for item in items:
        if not isinstance(item, dict):
            raise CatalogError(action=action, reason=f"unexpected {key} entry: {item!r}")
    return items


def _parse_project(item: dict[str, Any]) -> RemoteProject:
    try:
        tasks = [
            RemoteTask(id=int(task["id"]), label=str(task["label"]))
            for task in item.get("tasks") or []
        ]
        client = item.get("client")
        return RemoteProject(
            id=int(item["id"]),
            name=str(item["name"]),
            client=int(client) if client is not None else None,
            tasks=tasks,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise CatalogError(action="list projects", reason=f"malformed project: {e}") from e


def _parse_customer(item: dict[str, Any]) -> RemoteCustomer:
    try:
        return RemoteCustomer(id=int(item["id"]), name=str(item["name"]))
    except (KeyError, TypeError, ValueError) as e:
        raise CatalogError(action="list customers", reason=f"malformed customer: {e}") from e
