from __future__ import annotations

from pydantic import BaseModel, Field


class ConvertedCsv(BaseModel):
    filename: str
    sha256: str
    encoding: str = Field(default="utf-8-sig")
    content_b64: str


class ConversionSummary(BaseModel):
    rows: int = Field(default=0, examples=[2])
    columns: int = Field(default=32, examples=[32])
    skipped: int = 0
    deterministic: bool = True


class ConversionReport(BaseModel):
    summary: ConversionSummary


class ConvertResponse(BaseModel):
    converted_csv: ConvertedCsv
    report: ConversionReport

class HealthResponse(BaseModel):
    ok: bool = True
