"""Settings API -- convention profile and disabled rules."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

import dialoglint.deps as deps
from dialoglint.deps import get_options
from dialoglint.linter.catalog import ConventionProfile
from dialoglint.options import LintOptions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["settings"])


class LintSettingsResponse(BaseModel):
    profile: str = ""
    disabled_rules: list[str] = Field(default_factory=list)
    rule_ids: list[str] = Field(default_factory=list)


class LintSettingsUpdateRequest(BaseModel):
    profile: ConventionProfile | None = None
    disabled_rules: list[str] | None = None


def _settings_response(options: LintOptions) -> LintSettingsResponse:
    catalog = deps._catalog
    return LintSettingsResponse(
        profile=options.profile.value,
        disabled_rules=list(options.disabled_rules),
        rule_ids=catalog.ids() if catalog is not None else [],
    )


@router.get("/settings/lint", response_model=LintSettingsResponse)
async def get_lint_settings(
    options: LintOptions = Depends(get_options),
) -> LintSettingsResponse:
    """Return the active profile and disabled rules."""
    return _settings_response(options)


@router.put("/settings/lint", response_model=LintSettingsResponse)
async def update_lint_settings(
    body: LintSettingsUpdateRequest,
    current: LintOptions = Depends(get_options),
) -> LintSettingsResponse:
    """Switch profile or disabled rules at runtime (no restart needed).

    Only provided fields are updated; omitted fields keep their current value.
    """
    new_options = LintOptions(
        profile=body.profile if body.profile is not None else current.profile,
        disabled_rules=(
            body.disabled_rules if body.disabled_rules is not None else current.disabled_rules
        ),
    )
    try:
        new_catalog = new_options.catalog()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    # Swap globally
    deps._options = new_options
    deps._catalog = new_catalog
    logger.info(
        "Lint settings updated: profile=%s, disabled=%s",
        new_options.profile.value,
        new_options.disabled_rules or "none",
    )
    return _settings_response(new_options)
