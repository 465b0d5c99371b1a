"""Persisted bearer token for the booking API."""

from pathlib import Path
from typing import Optional

import yaml

from ..utils.logging import get_logger
from ..utils.time import utc_now_z

logger = get_logger(__name__)


class CredentialStore:
    """Keeps the auth token in a small YAML file between runs."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load_token(self) -> Optional[str]:
        if not self.path.exists():
            return None
        with self.path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed credentials file %s", self.path)
            return None
        token = data.get("auth_token")
        return token if isinstance(token, str) and token else None

    def save_token(self, token: str) -> None:
        if not token:
            raise ValueError("Refusing to store an empty token")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            yaml.safe_dump({"auth_token": token, "saved_at_utc": utc_now_z()}, f)
        self.path.chmod(0o600)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
