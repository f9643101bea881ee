"""K8s API client."""

import logging

from kubernetes_asyncio import client, config
from kubernetes_asyncio.client.api_client import ApiClient
from kubernetes_asyncio.config import ConfigException

_CLIENT: ApiClient | None = None
_LOGGER = logging.getLogger(__name__)


async def close_k8s_client() -> None:
    """Clean up k8s client."""

    global _CLIENT  # noqa: PLW0603

    if _CLIENT is None:
        return

    await _CLIENT.close()
    _CLIENT = None


async def get_k8s_client() -> ApiClient:
    """
    Get or create k8s API client.

    Uses the service account when running inside of a pod and falls back to the
    local kubeconfig otherwise.
    """

    global _CLIENT  # noqa: PLW0603

    if _CLIENT and _CLIENT.rest_client.pool_manager.closed:
        _CLIENT = None

    if _CLIENT is None:
        try:
            config.load_incluster_config()
        except ConfigException as ex:
            _LOGGER.debug("Not running in cluster, using kubeconfig", exc_info=ex)
            await config.load_kube_config()

        # another caller may have created the client while config loaded
        if _CLIENT is None:
            _CLIENT = ApiClient()

    return _CLIENT


async def get_v1_client() -> client.CoreV1Api:
    """Get core v1 k8s client."""

    return client.CoreV1Api(await get_k8s_client())
