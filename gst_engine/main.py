from __future__ import annotations

import logging
import os
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

from .billing import BillingMode, normalize_billing_mode
from .calculator import compute_amount_tax, compute_line_items
from .document import aggregate_document
from .errors import GstEngineError
from .schemas import (
    AmountTaxRequest,
    DocumentRequest,
    DocumentResponse,
    LineItemRequest,
    LineItemResponse,
    TaxBreakdownResponse,
)

STRICT_BILLING_MODE = os.getenv("GST_ENGINE_STRICT_BILLING_MODE", "false").lower() in {"1", "true", "yes"}

logger = logging.getLogger("gst_engine")

app = FastAPI(title="GST Engine")

GST_CALCULATIONS = Counter(
    "gst_calculations_total",
    "GST calculations served",
    ["operation"],
)
GST_REJECTED = Counter(
    "gst_rejected_total",
    "GST calculation requests rejected as invalid",
    ["operation"],
)
CALC_LAT = Histogram("gst_calc_seconds", "Calculate latency", ["operation"])


def _billing_mode(value: Optional[str]) -> BillingMode:
    return normalize_billing_mode(value, strict=STRICT_BILLING_MODE)


def _reject(operation: str, exc: GstEngineError) -> HTTPException:
    GST_REJECTED.labels(operation=operation).inc()
    logger.warning("rejected %s request: %s", operation, exc)
    return HTTPException(status_code=400, detail=str(exc))


@app.get("/metrics")
def metrics() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.get("/healthz")
def healthz() -> Dict[str, bool]:
    return {"ok": True}


@app.post("/gst/amount", response_model=TaxBreakdownResponse)
def amount_tax(req: AmountTaxRequest):
    with CALC_LAT.labels(operation="amount").time():
        try:
            result = compute_amount_tax(req.amount, req.tax_rate_percent, _billing_mode(req.billing_mode))
        except GstEngineError as exc:
            raise _reject("amount", exc) from exc
    GST_CALCULATIONS.labels(operation="amount").inc()
    return result.to_dict()


@app.post("/gst/line-item", response_model=LineItemResponse)
def line_item_tax(req: LineItemRequest):
    with CALC_LAT.labels(operation="line_item").time():
        try:
            mode = _billing_mode(req.billing_mode)
            items = compute_line_items([req.model_dump()], mode)
        except GstEngineError as exc:
            raise _reject("line_item", exc) from exc
    GST_CALCULATIONS.labels(operation="line_item").inc()
    return items[0].to_dict()


@app.post("/gst/document", response_model=DocumentResponse)
def document_tax(req: DocumentRequest):
    with CALC_LAT.labels(operation="document").time():
        try:
            mode = _billing_mode(req.billing_mode)
            lines = compute_line_items([item.model_dump() for item in req.items], mode)
            totals = aggregate_document(lines, req.discount, clamp_discount=req.clamp_discount)
        except GstEngineError as exc:
            raise _reject("document", exc) from exc
    GST_CALCULATIONS.labels(operation="document").inc()
    return {
        "billing_mode": mode.value,
        "lines": [line.to_dict() for line in lines],
        "totals": totals.to_dict(),
    }
