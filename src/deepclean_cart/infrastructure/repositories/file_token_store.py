import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any

from deepclean_cart.core.application.ports import TokenStorePort
from deepclean_cart.core.domain.session import Customer
from deepclean_cart.infrastructure.observability.logger_factory_service import get_logger

logger = get_logger("file_token_store")


class FileTokenStore(TokenStorePort):
    """Persists ``{"token": ..., "user": {...}}`` to a single JSON file.

    The file is created with mode 0600. A corrupt file reads as signed out.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    async def get_token(self) -> str | None:
        data = await asyncio.to_thread(self._read_json)
        token = data.get("token")
        return token if isinstance(token, str) and token else None

    async def get_customer(self) -> Customer | None:
        data = await asyncio.to_thread(self._read_json)
        user = data.get("user")
        if not isinstance(user, dict) or "id" not in user:
            return None
        return Customer.from_payload(user)

    async def save(self, customer: Customer, token: str) -> None:
        await asyncio.to_thread(self._write_json, {"token": token, "user": customer.to_payload()})

    async def clear(self) -> None:
        await asyncio.to_thread(self.path.unlink, missing_ok=True)

    def _read_json(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Failed to read token store, treating as signed out", error_details=str(exc))
            return {}
        return data if isinstance(data, dict) else {}

    def _write_json(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", dir=self.path.parent, delete=False, encoding="utf-8", suffix=".tmp"
        ) as tmp:
            json.dump(data, tmp)
            tmp_path = tmp.name
        os.chmod(tmp_path, 0o600)
        try:
            os.replace(tmp_path, self.path)
        except OSError:
            os.remove(tmp_path)
            raise
