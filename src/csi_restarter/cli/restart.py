"""CSI Restarter commands."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, cast

import uvicorn
from rich.console import Console
from rich.table import Table

from csi_restarter.cli.context import CoreContext, get_all_context
from csi_restarter.cli.options import OPTION_DRY_RUN  # noqa: TC001
from csi_restarter.data import DeletionOutcome, PassSummary, Settings, load_settings
from csi_restarter.exceptions import ConfigurationError, RestarterError
from csi_restarter.k8s import KubernetesCluster, close_k8s_client
from csi_restarter.restart import run_deletion_pass
from csi_restarter.web import create_app

if TYPE_CHECKING:
    from csi_restarter.k8s import ClusterApi

_LOGGER = logging.getLogger(__name__)
OUTCOME_STYLES = {
    DeletionOutcome.DELETED: "green",
    DeletionOutcome.TERMINATING: "green",
    DeletionOutcome.NOT_CONFIRMED: "yellow",
}


def _get_context() -> CoreContext:
    return cast(CoreContext, get_all_context("core"))


def _load_settings(**overrides: Any) -> Settings | None:  # noqa: ANN401
    context = _get_context()
    try:
        return load_settings(
            config_file=context.config_file if context else None, **overrides
        )
    except ConfigurationError as ex:
        _LOGGER.error("%s", ex)  # noqa: TRY400
        return None


def _run_pass(settings: Settings, cluster: ClusterApi | None = None) -> PassSummary:
    async def _run() -> PassSummary:
        try:
            return await run_deletion_pass(settings, cluster or KubernetesCluster())
        finally:
            await close_k8s_client()

    return asyncio.run(_run())


def _summary_table(summary: PassSummary) -> Table:
    title = "Deleted pods (dry run)" if summary.dry_run else "Deleted pods"
    table = Table(title=title)
    table.add_column("Namespace")
    table.add_column("Pod")
    table.add_column("Outcome")
    for path, outcome in summary.outcomes.items():
        table.add_row(
            path.namespace,
            path.name,
            f"[{OUTCOME_STYLES[outcome]}]{outcome}[/]",
        )

    return table


def serve() -> int:
    """Serve the HTTP trigger for deletion passes."""

    settings = _load_settings()
    if settings is None:
        return 1

    app = create_app(settings)
    _LOGGER.info("Listening on %s", settings.bind_address)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    return 0


def run(*, dry_run: OPTION_DRY_RUN = False) -> int:
    """
    Run a single deletion pass now.

    Only `RestarterError` is turned into exit code 1. Anything else is a bug and
    is left to propagate with its traceback.

    Parameters
    ----------
    dry_run: bool
        Force a dry run, regardless of the configured value.

    """

    overrides: dict[str, Any] = {"dry_run": True} if dry_run else {}
    settings = _load_settings(**overrides)
    if settings is None:
        return 1

    try:
        summary = _run_pass(settings)
    except RestarterError:
        _LOGGER.exception("Deletion pass failed")
        return 1

    console = Console()
    console.print(
        f"Matched {summary.matched_pvcs} PVCs and {len(summary.selected_pods)} pods"
    )
    if summary.outcomes:
        console.print(_summary_table(summary))
    return 0


def show_config() -> int:
    """Print the effective settings."""

    settings = _load_settings()
    if settings is None:
        return 1

    Console().print_json(settings.model_dump_json())
    return 0
