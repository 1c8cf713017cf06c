"""JSON snapshot files: users.json and communities.json under one data directory."""

import json
import logging
from pathlib import Path

from jackut.application.ports import PersistenceError
from jackut.domain import Community, User
from jackut.infrastructure.snapshot import (
    community_from_dict,
    community_to_dict,
    user_from_dict,
    user_to_dict,
)

logger = logging.getLogger(__name__)

USERS_FILE = "users.json"
COMMUNITIES_FILE = "communities.json"


def _read_snapshot(path: Path) -> list[dict]:
    """Return the stored list, [] when missing. A corrupt file is deleted and reads as []."""
    if not path.exists():
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise PersistenceError(f"Cannot read {path}") from e
    except json.JSONDecodeError:
        logger.warning("Corrupt snapshot %s; discarding it", path)
        path.unlink(missing_ok=True)
        return []
    if not isinstance(data, list):
        logger.warning("Unexpected snapshot shape in %s; discarding it", path)
        path.unlink(missing_ok=True)
        return []
    return data


def _write_snapshot(path: Path, items: list[dict]) -> None:
    """Replace the snapshot via a sibling temp file; a failed write leaves the old one in place."""
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(json.dumps(items, ensure_ascii=False), encoding="utf-8")
        tmp.replace(path)
    except OSError as e:
        raise PersistenceError(f"Cannot write {path}") from e


class JsonFileUserRepository:
    def __init__(self, data_dir: str | Path) -> None:
        self._path = Path(data_dir) / USERS_FILE

    def load_all(self) -> list[User]:
        try:
            return [user_from_dict(d) for d in _read_snapshot(self._path)]
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceError(f"Malformed user record in {self._path}") from e

    def save_all(self, users: list[User]) -> None:
        _write_snapshot(self._path, [user_to_dict(u) for u in users])


class JsonFileCommunityRepository:
    def __init__(self, data_dir: str | Path) -> None:
        self._path = Path(data_dir) / COMMUNITIES_FILE

    def load_all(self) -> list[Community]:
        try:
            return [community_from_dict(d) for d in _read_snapshot(self._path)]
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceError(f"Malformed community record in {self._path}") from e

    def save_all(self, communities: list[Community]) -> None:
        _write_snapshot(self._path, [community_to_dict(c) for c in communities])
