"""
createur/mentions/directory.py

User-directory collaborators for mention lookup and resolution.

  HttpUserDirectory     – calls GET /api/users/search over HTTP (client side)
  DatabaseUserDirectory – queries the User table directly (server side)

Both fail open: an error yields an empty list, never an exception.
"""
from __future__ import annotations

import logging
from typing import List, Optional

import requests

from createur.models import User
from createur.mentions.parser import KnownUser, match_user


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 3.0
DEFAULT_LIMIT   = 5


def user_to_known(user: User) -> KnownUser:
    return KnownUser(id=str(user.id), first_name=user.first_name, last_name=user.last_name or "")


class HttpUserDirectory:

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def search(self, query: str) -> List[KnownUser]:
        if not query:
            return []
        try:
            resp = self.session.get(
                f"{self.base_url}/api/users/search",
                params={"q": query},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            payload = resp.json()
            return [
                KnownUser(id=str(u["id"]), first_name=u["firstName"], last_name=u.get("lastName") or "")
                for u in payload
            ]
        except (requests.RequestException, ValueError, KeyError, TypeError) as exc:
            logger.warning("User search for %r failed: %s", query, exc)
            return []

    __call__ = search


class DatabaseUserDirectory:
    """
    Substring search over first name, last name and "first last",
    excluding the requesting user.  Needs an application context.
    """

    def __init__(self, exclude_user_id: Optional[int] = None, limit: int = DEFAULT_LIMIT) -> None:
        self.exclude_user_id = exclude_user_id
        self.limit = limit

    def _base_query(self):
        q = User.query
        if self.exclude_user_id is not None:
            q = q.filter(User.id != self.exclude_user_id)
        return q.order_by(User.id.asc())

    def search(self, query: str) -> List[KnownUser]:
        if not query:
            return []
        # Matched in Python: SQLite lower() only folds ASCII and LIKE treats % and _ as wildcards.
        needle = query.lower()
        matches = []
        for u in self._base_query():
            names = (u.first_name, u.last_name or "", f"{u.first_name} {u.last_name or ''}")
            if any(needle in name.lower() for name in names):
                matches.append(user_to_known(u))
                if len(matches) >= self.limit:
                    break
        return matches

    __call__ = search

    def resolve(self, token: str) -> Optional[KnownUser]:
        rows = User.query.order_by(User.id.asc()).all()
        return match_user(token, [user_to_known(u) for u in rows])


def http_directory_from_config(config) -> HttpUserDirectory:
    return HttpUserDirectory(
        config["USER_DIRECTORY_URL"],
        timeout=config.get("USER_LOOKUP_TIMEOUT", DEFAULT_TIMEOUT),
    )
