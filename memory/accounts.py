"""Account records and the current-session pointer.

This sits at the boundary of the wardrobe core: it only exists to tell the app
which username selects the inventory namespace.
"""
from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from typing import Dict, Optional

from logic.errors import AuthenticationFailed, UsernameTaken
from tools.kv_store import KeyValueStore

USERS_KEY = "smart-wardrobe-users"
SESSION_KEY = "smart-wardrobe-session"


@dataclass(frozen=True)
class User:
    username: str


def _credential(username: str, password: str) -> str:
    return hashlib.sha256(f"{username}:{password}".encode("utf-8")).hexdigest()


class AccountService:
    """Registers users and keeps the signed-in username in the backend."""

    def __init__(self, backend: KeyValueStore) -> None:
        self.backend = backend

    def _load_users(self) -> Dict[str, str]:
        raw = self.backend.get(USERS_KEY)
        return json.loads(raw) if raw else {}

    def _start_session(self, username: str) -> User:
        user = User(username=username)
        self.backend.set(SESSION_KEY, json.dumps({"username": username}, ensure_ascii=False))
        return user

    @staticmethod
    def _require(username: str, password: str) -> str:
        name = (username or "").strip()
        if not name or not password:
            raise AuthenticationFailed("请输入用户名和密码")
        return name

    def register(self, username: str, password: str) -> User:
        name = self._require(username, password)
        users = self._load_users()
        if name in users:
            raise UsernameTaken("用户名已存在")
        users[name] = _credential(name, password)
        self.backend.set(USERS_KEY, json.dumps(users, ensure_ascii=False))
        return self._start_session(name)

    def login(self, username: str, password: str) -> User:
        name = self._require(username, password)
        users = self._load_users()
        if users.get(name) != _credential(name, password):
            raise AuthenticationFailed("用户名或密码错误")
        return self._start_session(name)

    def logout(self) -> None:
        self.backend.delete(SESSION_KEY)

    def current_user(self) -> Optional[User]:
        raw = self.backend.get(SESSION_KEY)
        if not raw:
            return None
        username = json.loads(raw).get("username")
        return User(username=username) if username else None


__all__ = ["AccountService", "User", "USERS_KEY", "SESSION_KEY"]
