"""Validate API endpoint."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from dialoglint.deps import get_rule_catalog
from dialoglint.linter.catalog import RuleCatalog
from dialoglint.linter.errors import ParseError
from dialoglint.linter.pipeline import validate
from dialoglint.linter.report import render_text, summarize, to_records

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["validate"])


class ValidateRequest(BaseModel):
    yaml: str = Field(..., description="Dialog YAML document to lint")


class ValidateResponse(BaseModel):
    passed: bool
    error_count: int = 0
    warning_count: int = 0
    profile: str = ""
    findings: list[dict[str, Any]] = Field(default_factory=list)
    report: str = ""
    summary: str = ""


class RuleInfo(BaseModel):
    id: str
    severity: str
    description: str


@router.post("/validate", response_model=ValidateResponse)
def validate_document(
    body: ValidateRequest,
    catalog: RuleCatalog = Depends(get_rule_catalog),
) -> ValidateResponse:
    """Lint a dialog document. Unparseable YAML is rejected with 422."""
    try:
        result = validate(body.yaml, catalog)
    except ParseError as e:
        logger.info("Rejected document: %s", e)
        raise HTTPException(status_code=422, detail=e.to_dict())

    return ValidateResponse(
        passed=result.passed,
        error_count=result.error_count,
        warning_count=result.warning_count,
        profile=result.profile,
        findings=to_records(result),
        report=render_text(result),
        summary=summarize(result),
    )


@router.get("/rules", response_model=list[RuleInfo])
async def list_rules(
    catalog: RuleCatalog = Depends(get_rule_catalog),
) -> list[RuleInfo]:
    """Return the active rule catalog in evaluation order."""
    return [
        RuleInfo(id=rule.id, severity=rule.severity.value, description=rule.description)
        for rule in catalog
    ]
