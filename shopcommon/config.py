"""Configuration helpers for the catalog application.

Settings come from environment variables (optionally primed from a ``.env``
file next to the application). Collecting them in one frozen dataclass lets
tests build a configuration from a plain mapping without touching
``os.environ``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping
import logging
import os

from dotenv import load_dotenv

DEFAULT_ORIGINS = (
    "https://localhost",
    "https://127.0.0.1",
    "http://localhost",
    "http://127.0.0.1",
)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class AppConfig:
    """Strongly typed configuration for the catalog service."""

    base_dir: Path
    data_dir: Path
    secret_key: str
    admin_api_key: str
    admin_auth_enabled: bool
    force_tls: bool
    trust_proxy_headers: bool
    api_host: str
    api_port: int
    log_level: str
    low_stock_threshold: int
    recommendation_limit: int
    allowed_origins: tuple[str, ...]

    @property
    def products_file(self) -> Path:
        return self.data_dir / "products.json"


def env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    value = env.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _coerce_origins(raw: str | Iterable[str]) -> tuple[str, ...]:
    if isinstance(raw, str):
        items = [piece.strip() for piece in raw.split(",")]
    else:
        items = [piece.strip() for piece in raw]
    return tuple(filter(None, items)) or DEFAULT_ORIGINS


def load_app_config(base_dir: Path, env: Mapping[str, str] | None = None) -> AppConfig:
    """Load configuration from ``base_dir/.env`` and the given env mapping."""

    load_dotenv(base_dir / ".env")
    env_map = dict(os.environ if env is None else env)

    data_dir = env_map.get("DATA_DIR", "").strip()
    return AppConfig(
        base_dir=Path(base_dir),
        data_dir=Path(data_dir) if data_dir else Path.cwd() / "data",
        secret_key=env_map.get("SECRET_KEY", "dev-change-me"),
        admin_api_key=env_map.get("ADMIN_API_KEY", "your-secret-admin-key-here").strip(),
        admin_auth_enabled=not env_bool(env_map, "ADMIN_AUTH_DISABLED", False),
        force_tls=env_bool(env_map, "FORCE_TLS", False),
        trust_proxy_headers=env_bool(env_map, "TRUST_PROXY_HEADERS", True),
        api_host=env_map.get("API_HOST", "0.0.0.0"),
        api_port=_env_int(env_map, "API_PORT", 7890),
        log_level=env_map.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        low_stock_threshold=_env_int(env_map, "LOW_STOCK_THRESHOLD", 10),
        recommendation_limit=_env_int(env_map, "RECOMMENDATION_LIMIT", 6),
        allowed_origins=_coerce_origins(env_map.get("ALLOWED_ORIGINS", "")),
    )


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once; later calls only adjust the level."""

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    root.setLevel(level)
