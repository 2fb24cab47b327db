"""
createur/mentions/suggester.py

Live @mention autocomplete for a text box.

The caller feeds every edit through update(); when the text just before the
cursor ends in "@<word chars>" a query is active.  Lookups are tagged with a
generation number so that a response which arrives after the query moved on
is dropped instead of overwriting fresher suggestions.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from createur.mentions.parser import KnownUser


logger = logging.getLogger(__name__)

ACTIVE_QUERY_RE = re.compile(r"@(\w*)$")


@dataclass(frozen=True)
class LookupTicket:
    generation: int
    query: str


class MentionSuggester:

    def __init__(self, lookup: Callable[[str], Sequence[KnownUser]],
                 text: str = "", cursor_position: Optional[int] = None) -> None:
        self._lookup = lookup
        self._generation = 0
        self.text = ""
        self.cursor_position = 0
        self.query: Optional[str] = None
        self.suggestions: List[KnownUser] = []
        self.update(text, len(text) if cursor_position is None else cursor_position)

    # ── Editing ───────────────────────────────────────────────────────────────

    def update(self, text: str, cursor_position: int) -> Optional[str]:
        """Record an edit and return the active query (None when hidden)."""
        self.text = text
        self.cursor_position = max(0, min(cursor_position, len(text)))

        match = ACTIVE_QUERY_RE.search(text[:self.cursor_position])
        query = match.group(1) if match else None
        if query != self.query:
            self.suggestions = []
        self.query = query
        return query

    @property
    def is_active(self) -> bool:
        return self.query is not None

    def dismiss(self) -> None:
        self.query = None
        self.suggestions = []
        self._generation += 1

    # ── Lookup ────────────────────────────────────────────────────────────────

    def begin_lookup(self) -> Optional[LookupTicket]:
        if not self.query:
            return None
        self._generation += 1
        return LookupTicket(self._generation, self.query)

    def is_current(self, ticket: LookupTicket) -> bool:
        return ticket.generation == self._generation and ticket.query == self.query

    def apply_lookup(self, ticket: LookupTicket, users: Sequence[KnownUser]) -> bool:
        if not self.is_current(ticket):
            logger.debug("Dropping stale lookup for %r (generation %d)",
                         ticket.query, ticket.generation)
            return False
        self.suggestions = list(users)
        return True

    def fail_lookup(self, ticket: LookupTicket) -> None:
        if self.is_current(ticket):
            self.suggestions = []

    def refresh(self) -> List[KnownUser]:
        """Run one lookup for the current query; any failure means no suggestions."""
        ticket = self.begin_lookup()
        if ticket is None:
            self.suggestions = []
            return []
        try:
            users = self._lookup(ticket.query)
        except Exception as exc:
            logger.warning("User lookup for %r failed: %s", ticket.query, exc)
            self.fail_lookup(ticket)
            return []
        self.apply_lookup(ticket, users or [])
        return list(self.suggestions)

    # ── Selection ─────────────────────────────────────────────────────────────

    def select(self, user: KnownUser) -> bool:
        """Replace the "@query" before the cursor with "@First " and move the cursor."""
        before = self.text[:self.cursor_position]
        match = ACTIVE_QUERY_RE.search(before)
        if self.query is None or match is None:
            return False

        inserted = f"@{user.first_name} "
        head = before[:match.start()]
        self.text = head + inserted + self.text[self.cursor_position:]
        self.cursor_position = len(head) + len(inserted)
        self.query = None
        self.suggestions = []
        self._generation += 1
        return True
