"""HTTP trigger for deletion passes."""

from __future__ import annotations

import logging
import secrets
import time
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from csi_restarter.exceptions import AuthenticationError, RestarterError
from csi_restarter.k8s import KubernetesCluster, close_k8s_client
from csi_restarter.restart import run_deletion_pass
from csi_restarter.utils import VERSION

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from csi_restarter.data import Settings
    from csi_restarter.k8s import ClusterApi

ERROR_GENERIC = "Something went wrong"
ERROR_UNAUTHORIZED = "Missing or invalid bearer token"
_BEARER = HTTPBearer(auto_error=False)
_LOGGER = logging.getLogger(__name__)


def require_token(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_BEARER)],
) -> None:
    """Check bearer token against the configured one."""

    settings: Settings = request.app.state.settings
    expected = settings.bearer_token.get_secret_value().encode()
    if credentials is None or not secrets.compare_digest(
        credentials.credentials.encode(), expected
    ):
        raise AuthenticationError(ERROR_UNAUTHORIZED)


@asynccontextmanager
async def _lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    try:
        yield
    finally:
        await close_k8s_client()


async def _on_auth_error(request: Request, ex: Exception) -> Response:
    _LOGGER.warning("Rejected %s %s: %s", request.method, request.url.path, ex)
    return Response(
        status_code=HTTPStatus.UNAUTHORIZED,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _trace_request(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    start = time.perf_counter()
    response = await call_next(request)
    _LOGGER.info(
        "%s %s %s %.1fms",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - start) * 1000,
    )
    return response


async def delete_pods_with_pvc(request: Request) -> Response:
    """Run a deletion pass. Failure details are only logged, never returned."""

    settings: Settings = request.app.state.settings
    cluster: ClusterApi = request.app.state.cluster
    try:
        await run_deletion_pass(settings, cluster)
    except RestarterError:
        _LOGGER.exception("Deletion pass failed")
        return PlainTextResponse(
            ERROR_GENERIC, status_code=HTTPStatus.INTERNAL_SERVER_ERROR
        )

    return Response(status_code=HTTPStatus.OK)


def create_app(settings: Settings, cluster: ClusterApi | None = None) -> FastAPI:
    """Create HTTP app for triggering deletion passes."""

    app = FastAPI(
        title="CSI Restarter",
        version=VERSION,
        lifespan=_lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.cluster = cluster or KubernetesCluster()

    app.add_exception_handler(AuthenticationError, _on_auth_error)
    app.middleware("http")(_trace_request)
    app.add_api_route(
        "/delete",
        delete_pods_with_pvc,
        methods=["GET"],
        dependencies=[Depends(require_token)],
    )
    return app
