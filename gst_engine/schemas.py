from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class AmountTaxRequest(BaseModel):
    amount: float = Field(..., ge=0, description="Base amount, tax-inclusive or tax-exclusive depending on billing mode")
    tax_rate_percent: float = Field(..., ge=0, description="Combined GST rate, e.g. 18 for 18%")
    billing_mode: Optional[str] = Field(None, description="inclusive_gst, exclusive_gst or no_gst; missing means inclusive")


class LineItemRequest(BaseModel):
    unit_price: float = Field(..., ge=0)
    quantity: float = Field(..., ge=0)
    tax_rate_percent: Optional[float] = Field(None, ge=0, description="Combined GST rate; falls back to cgst_percent + sgst_percent")
    cgst_percent: Optional[float] = Field(None, ge=0)
    sgst_percent: Optional[float] = Field(None, ge=0)
    billing_mode: Optional[str] = Field(None, description="Used by the single line endpoint; document lines follow the document billing mode")


class DocumentRequest(BaseModel):
    items: List[LineItemRequest] = Field(default_factory=list)
    billing_mode: Optional[str] = None
    discount: float = Field(0, ge=0, description="Amount taken off the grand total")
    clamp_discount: bool = Field(False, description="Floor the grand total at zero")


class TaxBreakdownResponse(BaseModel):
    taxable_value: float
    cgst_amount: float
    sgst_amount: float
    total_tax: float
    total_amount: float


class LineItemResponse(TaxBreakdownResponse):
    quantity: float
    unit_price: float


class DocumentTotalsResponse(BaseModel):
    subtotal: float
    total_cgst: float
    total_sgst: float
    total_tax: float
    gross_total: float
    discount: float
    grand_total: float
    line_count: int


class DocumentResponse(BaseModel):
    billing_mode: str
    lines: List[LineItemResponse]
    totals: DocumentTotalsResponse
