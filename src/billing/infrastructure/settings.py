"""Runtime configuration, read from ``BILLING_*`` environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from billing.domain.exceptions import ValidationError
from billing.domain.model.bill import DEFAULT_PREFIX, DEFAULT_WIDTH
from billing.domain.model.value_objects import DEFAULT_CURRENCY

ENV_PREFIX = "BILLING_"

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX, env_file=".env", extra="ignore", frozen=True
    )

    # ── Storage ───────────────────────────────────────────────
    data_dir: Path = _DEFAULT_DATA_DIR

    # ── Bill numbering ────────────────────────────────────────
    bill_prefix: str = DEFAULT_PREFIX
    bill_number_width: int = Field(DEFAULT_WIDTH, ge=1)

    # ── Money & reports ───────────────────────────────────────
    currency: str = DEFAULT_CURRENCY
    low_stock_threshold: int = Field(10, ge=0)

    # ── Output ────────────────────────────────────────────────
    log_level: str = "WARNING"
    invoice_page_size: int = Field(20, ge=1)

    @field_validator("data_dir")
    @classmethod
    def _expand_home(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("bill_prefix")
    @classmethod
    def _prefix_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("cannot be empty")
        return value

    @field_validator("currency", "log_level")
    @classmethod
    def _upper_not_blank(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("cannot be empty")
        return value

    @property
    def products_file(self) -> Path:
        return self.data_dir / "products.json"

    @property
    def bills_file(self) -> Path:
        return self.data_dir / "bills.json"

    @property
    def invoices_dir(self) -> Path:
        return self.data_dir / "invoices"


def load_settings() -> Settings:
    """Build Settings from the environment, reporting bad values by variable name."""
    try:
        return Settings()
    except PydanticValidationError as exc:
        problems = "; ".join(
            f"{ENV_PREFIX}{'.'.join(str(part) for part in err['loc']).upper()}: {err['msg']}"
            for err in exc.errors()
        )
        raise ValidationError(f"Invalid configuration: {problems}") from exc
