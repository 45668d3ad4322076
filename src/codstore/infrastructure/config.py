"""Runtime settings read from the environment (and a local .env file)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import structlog
from dotenv import load_dotenv

logger = structlog.get_logger(__name__)

DEFAULT_PATHAO_BASE_URL = "https://courier-api-sandbox.pathao.com"


def _int_or_none(raw: str | None, name: str) -> int | None:
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring malformed setting", setting=name, value=raw)
        return None


@dataclass(frozen=True)
class Settings:
    pathao_base_url: str = DEFAULT_PATHAO_BASE_URL
    pathao_store_id: int | None = None
    pathao_client_id: str | None = None
    pathao_client_secret: str | None = None
    pathao_username: str | None = None
    pathao_password: str | None = None
    audit_sink_url: str | None = None
    order_id_prefix: str = "CR"
    http_timeout: float = 15.0
    data_dir: Path = Path("data")
    api_url: str | None = None
    log_level: str = "INFO"
    admin_key: str | None = None

    @property
    def pathao_credentials_set(self) -> bool:
        return all(
            (
                self.pathao_client_id,
                self.pathao_client_secret,
                self.pathao_username,
                self.pathao_password,
            )
        )

    @property
    def pathao_enabled(self) -> bool:
        """Consignments and price lookups need the store id and every credential."""
        return self.pathao_store_id is not None and self.pathao_credentials_set

    @staticmethod
    def from_env() -> Settings:
        load_dotenv()
        return Settings(
            pathao_base_url=os.getenv("PATHAO_BASE_URL") or DEFAULT_PATHAO_BASE_URL,
            pathao_store_id=_int_or_none(os.getenv("PATHAO_STORE_ID"), "PATHAO_STORE_ID"),
            pathao_client_id=os.getenv("PATHAO_CLIENT_ID") or None,
            pathao_client_secret=os.getenv("PATHAO_CLIENT_SECRET") or None,
            pathao_username=os.getenv("PATHAO_USERNAME") or None,
            pathao_password=os.getenv("PATHAO_PASSWORD") or None,
            audit_sink_url=(
                os.getenv("AUDIT_SINK_URL") or os.getenv("GOOGLE_SCRIPT_ORDERS_URL") or None
            ),
            order_id_prefix=os.getenv("ORDER_ID_PREFIX", "CR"),
            http_timeout=float(os.getenv("HTTP_TIMEOUT", "15")),
            data_dir=Path(os.getenv("CODSTORE_DATA_DIR", "data")),
            api_url=os.getenv("CODSTORE_API_URL") or None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            admin_key=os.getenv("ADMIN_KEY") or None,
        )
