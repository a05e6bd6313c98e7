import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_decimal(name: str, default: str) -> Decimal:
    raw = os.getenv(name, default)
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise ValueError(f"{name} must be a number, got {raw!r}")
    if not value.is_finite():
        raise ValueError(f"{name} must be a finite number, got {raw!r}")
    return value


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, str(default))
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    default_min_stock: Decimal
    lock_timeout: float
    max_retries: int
    retry_backoff: float
    notes_max_length: int
    history_page_size: int
    log_level: str
    log_json: bool

    @staticmethod
    def from_env() -> "Settings":
        settings = Settings(
            data_dir=Path(os.getenv("STOCKLEDGER_DATA_DIR", "data")),
            default_min_stock=_env_decimal("STOCKLEDGER_DEFAULT_MIN_STOCK", "10"),
            lock_timeout=_env_float("STOCKLEDGER_LOCK_TIMEOUT", 2.0),
            max_retries=_env_int("STOCKLEDGER_MAX_RETRIES", 3),
            retry_backoff=_env_float("STOCKLEDGER_RETRY_BACKOFF", 0.05),
            notes_max_length=_env_int("STOCKLEDGER_NOTES_MAX_LENGTH", 500),
            history_page_size=_env_int("STOCKLEDGER_HISTORY_PAGE_SIZE", 100),
            log_level=os.getenv("STOCKLEDGER_LOG_LEVEL", "INFO").upper(),
            log_json=os.getenv("STOCKLEDGER_LOG_JSON", "False").lower() == "true",
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        if self.default_min_stock < 0:
            raise ValueError("STOCKLEDGER_DEFAULT_MIN_STOCK cannot be negative")
        if self.lock_timeout <= 0:
            raise ValueError("STOCKLEDGER_LOCK_TIMEOUT must be positive")
        if self.max_retries < 0:
            raise ValueError("STOCKLEDGER_MAX_RETRIES cannot be negative")
        if self.retry_backoff < 0:
            raise ValueError("STOCKLEDGER_RETRY_BACKOFF cannot be negative")
        if self.notes_max_length < 1:
            raise ValueError("STOCKLEDGER_NOTES_MAX_LENGTH must be at least 1")
        if self.history_page_size < 1:
            raise ValueError("STOCKLEDGER_HISTORY_PAGE_SIZE must be at least 1")
