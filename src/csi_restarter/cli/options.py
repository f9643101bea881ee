"""CSI Restarter CLI options."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

from cyclopts import Parameter

from csi_restarter.log import LoggingFormat, LoggingLevel

OPTION_LOG_FORMAT = Annotated[LoggingFormat, Parameter(env_var="RESTARTER_LOG_FORMAT")]
OPTION_LOG_LEVEL = Annotated[LoggingLevel, Parameter(env_var="RESTARTER_LOG_LEVEL")]
OPTION_LOG_CONFIG = Annotated[
    dict[str, Any], Parameter(env_var="RESTARTER_LOG_CONFIG")
]

OPTION_CONFIG_FILE = Annotated[
    Path | None,
    Parameter(("--config", "-c"), env_var="RESTARTER_CONFIG_FILE"),
]

OPTION_DRY_RUN = Annotated[bool, Parameter("--dry-run", negative="")]
