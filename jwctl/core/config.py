"""Configuration for the interactive list selection widget.

Settings come from defaults, optionally overridden by ``JW_SELECT_*``
environment variables and then by explicit keyword overrides (the CLI
passes its flags this way).
"""

import os
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from rich.errors import StyleSyntaxError
from rich.style import Style

from jwctl.utils.log import get_logger


logger = get_logger()

ENV_PREFIX = "JW_SELECT_"


class ListSelectionConfig(BaseModel):
    """Tunable behaviour of the list selection widget."""

    model_config = {"frozen": True}

    # Upper bound on how long one loop iteration waits for a key press, in seconds.
    poll_interval: float = Field(default=0.25, gt=0, le=60, allow_inf_nan=False)
    # Rows of the inline viewport.
    viewport_height: int = Field(default=8, ge=1)
    highlight_symbol: str = ">> "
    # Any rich style definition, e.g. "bold italic" or "reverse cyan".
    highlight_style: str = "bold italic"

    @field_validator("highlight_style")
    @classmethod
    def _check_style(cls, value: str) -> str:
        try:
            Style.parse(value)
        except StyleSyntaxError as exc:
            raise ValueError(f"invalid highlight style {value!r}: {exc}") from exc
        return value

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "ListSelectionConfig":
        """Build a config from ``JW_SELECT_*`` variables plus explicit overrides.

        Invalid environment values are reported and ignored. Invalid explicit
        overrides raise ``pydantic.ValidationError``.
        """
        env = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        for field_name in cls.model_fields:
            raw = env.get(f"{ENV_PREFIX}{field_name.upper()}")
            if raw is not None and raw != "":
                data[field_name] = raw

        try:
            base = cls(**data)
        except ValidationError as exc:
            logger.warning(
                "Ignoring invalid list selection settings from environment: %s",
                exc.errors(include_url=False),
                extra={"variables": sorted(f"{ENV_PREFIX}{k.upper()}" for k in data)},
            )
            base = cls()

        explicit = {key: value for key, value in overrides.items() if value is not None}
        if not explicit:
            return base
        return cls(**{**base.model_dump(), **explicit})


__all__ = ["ENV_PREFIX", "ListSelectionConfig"]
