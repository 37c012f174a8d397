from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from boudoir_console.app.drafts.draft_store import drafts_path as default_drafts_path

DEFAULT_BASE_URL = "http://localhost:8000"


@dataclass(frozen=True)
class AppConfig:
    base_url: str
    timeout_seconds: float
    verify_ssl: bool
    retry_max_attempts: int
    retry_backoff_ms: int
    drafts_path: Path
    export_dir: str

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "AppConfig":
        _load_dotenv(env_file)
        config = cls(
            base_url=os.getenv("BOUDOIR_API_BASE_URL", DEFAULT_BASE_URL).strip(),
            timeout_seconds=float(os.getenv("BOUDOIR_TIMEOUT_SECONDS", "20")),
            verify_ssl=os.getenv("BOUDOIR_VERIFY_SSL", "true").lower() == "true",
            retry_max_attempts=int(os.getenv("BOUDOIR_RETRY_MAX_ATTEMPTS", "3")),
            retry_backoff_ms=int(os.getenv("BOUDOIR_RETRY_BACKOFF_MS", "150")),
            drafts_path=default_drafts_path(),
            export_dir=os.getenv("BOUDOIR_EXPORT_DIR", "out/exports").strip() or "out/exports",
        )
        config.validate()
        return config

    def validate(self) -> None:
        if not self.base_url:
            raise ValueError("BOUDOIR_API_BASE_URL ne peut pas être vide")
        if self.timeout_seconds <= 0:
            raise ValueError("BOUDOIR_TIMEOUT_SECONDS doit être supérieur à 0")
        if self.retry_max_attempts < 1:
            raise ValueError("BOUDOIR_RETRY_MAX_ATTEMPTS doit être >= 1")
        if self.retry_backoff_ms < 0:
            raise ValueError("BOUDOIR_RETRY_BACKOFF_MS doit être >= 0")


def _load_dotenv(path: str) -> None:
    dotenv_path = Path(path)
    if not dotenv_path.exists():
        return
    for raw_line in dotenv_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())
