"""
createur/users/xp.py

XP and level progression.

    level = floor(sqrt(xp / 100)) + 1
    Level 1: 0-99 XP, Level 2: 100-399 XP, Level 3: 400-899 XP, …
"""
from __future__ import annotations

import math

from flask import current_app

from createur import db
from createur.models import User


def calculate_level(xp: int) -> int:
    return math.floor(math.sqrt(max(xp, 0) / 100)) + 1


def xp_for_level(level: int) -> int:
    """Minimum XP needed to reach level."""
    return 100 * (max(level, 1) - 1) ** 2


def level_progress(xp: int) -> dict:
    level = calculate_level(xp)
    floor_xp = xp_for_level(level)
    next_xp = xp_for_level(level + 1)
    return {
        "level":       level,
        "xp":          xp,
        "nextLevelXp": next_xp,
        "pct":         int((xp - floor_xp) / (next_xp - floor_xp) * 100),
    }


def award_xp(user_id: int, amount: int) -> bool:
    """Add XP and recompute the level.  Returns False if nothing was saved."""
    user = db.session.get(User, user_id)
    if not user:
        return False
    try:
        user.xp += amount
        user.level = calculate_level(user.xp)
        db.session.commit()
    except Exception as exc:
        db.session.rollback()
        current_app.logger.error("Awarding %d XP to user %s failed: %s", amount, user_id, exc)
        return False
    return True


class XpReward:
    """Reward sink for a quiz session: reward(amount) grants XP to one user."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        self.granted = 0

    def __call__(self, amount: int) -> None:
        if award_xp(self.user_id, amount):
            self.granted += amount
