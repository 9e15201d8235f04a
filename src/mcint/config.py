"""Package defaults, render settings and logging setup."""

import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field

# Seed used when the caller does not pass one
DEFAULT_SEED = 1291

LOG_LEVEL_ENV = "MCINT_LOG_LEVEL"


class RenderSettings(BaseModel):
    """Appearance of the estimate plot."""

    padding_factor: float = Field(
        default=1.15,
        ge=1.0,
        description="Plotted domain is [b - p*(b-a), a + p*(b-a)]",
    )
    num_points: int = Field(
        default=1000,
        ge=2,
        description="Grid points used to draw the curve and the shaded area",
    )
    fill_color: str = Field(
        default="#F8766D",
        description="Colour of the shaded integration area",
    )
    fill_alpha: float = Field(
        default=0.4,
        ge=0.0,
        le=1.0,
        description="Opacity of the shaded integration area",
    )
    line_color: str = Field(
        default="black",
        description="Colour of the function curve",
    )
    figsize: tuple[float, float] = Field(
        default=(7.0, 5.0),
        description="Figure size in inches when a new figure is created",
    )


def configure_logging(
    level: int | str | None = None,
    filename: str | Path | None = None,
) -> None:
    """Configure root logging for scripts using the package.

    Args:
        level: Logging level; read from MCINT_LOG_LEVEL when None
        filename: Log file path (stderr when None)
    """
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, "INFO").upper()

    logging.basicConfig(
        level=level,
        filename=str(filename) if filename is not None else None,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
