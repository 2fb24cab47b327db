"""
createur/mentions/parser.py

Splits message text into plain-text and @mention segments.

    "Hello @Easy Packs, welcome"
        → [PlainText("Hello "), MentionRef("@Easy Packs", "43311594"), PlainText(", welcome")]

A candidate token is "@" followed by one word, optionally followed by a
single whitespace character and a second word.  Two-word candidates are
tried first; if they do not resolve, the first word is tried on its own and
the second word is left as ordinary text.  Joining every segment's text
always gives back the original content.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union


MENTION_RE = re.compile(r"@(\w+)(?:\s(\w+))?")


@dataclass(frozen=True)
class KnownUser:
    id: str
    first_name: str
    last_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class PlainText:
    text: str

    @property
    def literal(self) -> str:
        return self.text

    def to_dict(self):
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class MentionRef:
    display_text: str
    user_id: str

    @property
    def literal(self) -> str:
        return self.display_text

    def to_dict(self):
        return {"type": "mention", "text": self.display_text, "userId": self.user_id}


TextSegment = Union[PlainText, MentionRef]


# ── Resolution ────────────────────────────────────────────────────────────────

def match_user(token: str, users: Iterable[KnownUser]) -> Optional[KnownUser]:
    """
    Resolve a token (without the "@") against users, trying in order:
      1. "First Last"
      2. "FirstLast"
      3. "First"
    All comparisons are case-insensitive.  Within a rule the first user wins.
    """
    wanted = token.lower()
    users = list(users)
    rules = (
        lambda u: f"{u.first_name} {u.last_name}",
        lambda u: f"{u.first_name}{u.last_name}",
        lambda u: u.first_name,
    )
    for rule in rules:
        for user in users:
            if rule(user).lower() == wanted:
                return user
    return None


class KnownUserSet:
    """In-memory directory: an ordered, immutable collection of users."""

    def __init__(self, users: Iterable[KnownUser] = ()) -> None:
        self._users = tuple(users)

    def __iter__(self):
        return iter(self._users)

    def __len__(self) -> int:
        return len(self._users)

    def resolve(self, token: str) -> Optional[KnownUser]:
        return match_user(token, self._users)


# ── Parser ────────────────────────────────────────────────────────────────────

class MentionParser:
    """
    directory: anything with resolve(token) -> KnownUser | None.
    """

    def __init__(self, directory) -> None:
        self.directory = directory

    def _resolve_at(self, match: re.Match):
        """Return (user, end) for the longest form of the token that resolves."""
        first, second = match.group(1), match.group(2)
        if second is not None:
            user = self.directory.resolve(match.group(0)[1:])
            if user is not None:
                return user, match.end()
        user = self.directory.resolve(first)
        return user, match.start(1) + len(first)

    def parse(self, content: str) -> List[TextSegment]:
        segments: List[TextSegment] = []

        def push_text(text: str) -> None:
            if not text:
                return
            if segments and isinstance(segments[-1], PlainText):
                segments[-1] = PlainText(segments[-1].text + text)
            else:
                segments.append(PlainText(text))

        pos = 0
        while True:
            match = MENTION_RE.search(content, pos)
            if match is None:
                break
            push_text(content[pos:match.start()])

            user, end = self._resolve_at(match)
            token_text = content[match.start():end]
            if user is not None:
                segments.append(MentionRef(display_text=token_text, user_id=str(user.id)))
            else:
                push_text(token_text)
            pos = end

        push_text(content[pos:])
        return segments

    def mentioned_users(self, content: str) -> List[KnownUser]:
        """Distinct users mentioned in content, in document order."""
        seen, found = set(), []
        pos = 0
        while True:
            match = MENTION_RE.search(content, pos)
            if match is None:
                return found
            user, pos = self._resolve_at(match)
            if user is not None and user.id not in seen:
                seen.add(user.id)
                found.append(user)


def parse_mentions(content: str, known_users: Iterable[KnownUser]) -> List[TextSegment]:
    return MentionParser(KnownUserSet(known_users)).parse(content)


def extract_mentions(content: str, known_users: Iterable[KnownUser]) -> List[KnownUser]:
    return MentionParser(KnownUserSet(known_users)).mentioned_users(content)


def segments_to_text(segments: Iterable[TextSegment]) -> str:
    return "".join(s.literal for s in segments)
