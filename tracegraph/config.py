from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── App ──────────────────────────────────────────────
    app_name: str = "TraceGraph"
    app_version: str = "0.1.0"
    debug: bool = False

    # ── Compiler output ──────────────────────────────────
    target_dir: Path = Path("target")
    trace_filename: str = "trace.json"

    @property
    def trace_path(self) -> Path:
        return self.target_dir / self.trace_filename

    # ── Graph ────────────────────────────────────────────
    merge_noops: bool = True
    contraction_fallback: Literal["root", "detach"] = "root"


settings = Settings()
