"""Runtime settings, read from the environment and an optional ``.env``."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# When installed in editable mode the project root is the repo root.
ROOT_DIR = Path(__file__).resolve().parents[3]

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


@dataclass(frozen=True)
class Settings:
    env: str
    data_dir: Path
    log_level: str

    @property
    def store_path(self) -> Path:
        return self.data_dir / "store.json"

    @property
    def catalog_path(self) -> Path:
        return self.data_dir / "catalog.json"

    @property
    def establishments_path(self) -> Path:
        return self.data_dir / "establishments.json"


def load_settings() -> Settings:
    load_dotenv(dotenv_path=ROOT_DIR / ".env")

    env = (_get_env("RXCART_ENV", "ENVIRONMENT", default="development") or "development").lower()
    data_dir = _get_env("RXCART_DATA_DIR", default=str(ROOT_DIR / "data"))

    return Settings(
        env=env,
        data_dir=Path(data_dir),  # type: ignore[arg-type]
        log_level=(_get_env("LOG_LEVEL", default=_LEVELS_BY_ENV.get(env, "INFO")) or "INFO").upper(),
    )
