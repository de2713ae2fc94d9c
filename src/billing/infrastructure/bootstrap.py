"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from billing.infrastructure.persistence.json_bill_repository import JsonBillRepository
from billing.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from billing.infrastructure.rendering.text_invoice import TextInvoiceRenderer
from billing.infrastructure.settings import Settings, load_settings


@lru_cache(maxsize=1)
def settings() -> Settings:
    return load_settings()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().products_file)


def bill_repository() -> JsonBillRepository:
    return JsonBillRepository(settings().bills_file)


def invoice_renderer() -> TextInvoiceRenderer:
    cfg = settings()
    return TextInvoiceRenderer(cfg.invoices_dir, page_size=cfg.invoice_page_size)
