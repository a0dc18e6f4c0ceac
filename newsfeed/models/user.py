from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Set


@dataclass
class UserPreferences:
    categories: List[str] = field(default_factory=list)
    languages: List[str] = field(default_factory=list)


@dataclass
class User:
    id: int
    name: str
    email: str
    password_hash: str
    preferences: UserPreferences = field(default_factory=UserPreferences)
    # Article IDs by value; they need not resolve to a cached article
    read_ids: Set[str] = field(default_factory=set)
    favorite_ids: Set[str] = field(default_factory=set)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
