import threading
from typing import Dict, FrozenSet, List, Optional, Tuple

from ..exceptions import UserAlreadyExistsError, UserNotFoundError
from ..models.user import User, UserPreferences


class InMemoryUserRepository:
    """Process-local user store; every mutation happens under one lock"""

    def __init__(self):
        self._users: Dict[int, User] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, name: str, email: str, password_hash: str) -> User:
        with self._lock:
            if self._find_by_email(email) is not None:
                raise UserAlreadyExistsError(email)

            user = User(
                id=self._next_id,
                name=name,
                email=email,
                password_hash=password_hash,
            )
            self._users[user.id] = user
            self._next_id += 1
            return user

    def get(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return self._find_by_email(email)

    def update_preferences(
        self,
        user_id: int,
        categories: Optional[List[str]] = None,
        languages: Optional[List[str]] = None,
    ) -> UserPreferences:
        with self._lock:
            user = self._require(user_id)
            current = user.preferences
            user.preferences = UserPreferences(
                categories=list(categories) if categories is not None else list(current.categories),
                languages=list(languages) if languages is not None else list(current.languages),
            )
            return user.preferences

    def mark_read(self, user_id: int, article_id: str) -> None:
        with self._lock:
            self._require(user_id).read_ids.add(article_id)

    def mark_favorite(self, user_id: int, article_id: str) -> None:
        with self._lock:
            self._require(user_id).favorite_ids.add(article_id)

    def get_article_state(self, user_id: int) -> Tuple[FrozenSet[str], FrozenSet[str]]:
        """Snapshot of (read_ids, favorite_ids)"""
        with self._lock:
            user = self._require(user_id)
            return frozenset(user.read_ids), frozenset(user.favorite_ids)

    def _find_by_email(self, email: str) -> Optional[User]:
        wanted = email.lower()
        for user in self._users.values():
            if user.email.lower() == wanted:
                return user
        return None

    def _require(self, user_id: int) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user
