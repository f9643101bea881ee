"""CSI Restarter CLI."""

from __future__ import annotations

from typing import Annotated

from cyclopts import App, Parameter

from csi_restarter.cli.context import CoreContext, set_context
from csi_restarter.cli.options import (
    OPTION_CONFIG_FILE,
    OPTION_LOG_CONFIG,
    OPTION_LOG_FORMAT,
    OPTION_LOG_LEVEL,
)
from csi_restarter.cli.restart import run, serve, show_config
from csi_restarter.log import DEFAULT_LOG_CONFIG, init_logging

app = App(
    help="""
    CSI Restarter CLI.

    Restart k8s pods that mount PVCs from a set of storage classes, so their
    controllers recreate them.
"""
)
app.command(serve, name="serve")
app.command(run, name="run")
app.command(show_config, name="config")


@app.meta.default
def meta(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    logging_format: OPTION_LOG_FORMAT = "auto",
    logging_level: OPTION_LOG_LEVEL = "INFO",
    logging_config: OPTION_LOG_CONFIG = DEFAULT_LOG_CONFIG,
    config: OPTION_CONFIG_FILE = None,
) -> int | None:
    """CSI Restarter."""

    set_context(
        "core",
        CoreContext(
            logging_format=logging_format,
            logging_level=logging_level,
            config_file=config,
        ),
    )
    init_logging(logging_format, logging_level, config=logging_config)

    return app(tokens)  # type: ignore[no-any-return]
