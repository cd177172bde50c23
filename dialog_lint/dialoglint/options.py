"""Lint options: JSON options file with environment fallback."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field

from dialoglint.linter.catalog import ConventionProfile, RuleCatalog, build_catalog

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS_PATH = "/data/options.json"


class LintOptions(BaseModel):
    profile: ConventionProfile = ConventionProfile.core
    disabled_rules: list[str] = Field(default_factory=list)

    def catalog(self) -> RuleCatalog:
        return build_catalog(self.profile, self.disabled_rules)


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def load_options() -> LintOptions:
    """Load options from DIALOGLINT_OPTIONS_PATH (or /data/options.json), else env vars."""
    opts_path = Path(os.environ.get("DIALOGLINT_OPTIONS_PATH", DEFAULT_OPTIONS_PATH))
    if opts_path.exists():
        logger.debug("Reading options from %s", opts_path)
        return LintOptions.model_validate(json.loads(opts_path.read_text()))
    return LintOptions(
        profile=os.environ.get("DIALOGLINT_PROFILE", ConventionProfile.core.value),
        disabled_rules=_split_csv(os.environ.get("DIALOGLINT_DISABLED_RULES", "")),
    )


def configure_logging() -> None:
    log_level = logging.DEBUG if os.environ.get("DIALOGLINT_DEV_MODE") else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
