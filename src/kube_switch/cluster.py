"""
Cluster queries used for shell completion

Read-only: nothing here touches the kubeconfig mutation path.
"""

import logging
from pathlib import Path
from typing import Optional

from kubernetes import client as k8s_client
from kubernetes.config import new_client_from_config

from .errors import NamespaceListingError

logger = logging.getLogger(__name__)


def list_namespaces(
    kubeconfig_path: Path,
    context: Optional[str] = None,
    timeout: float = 5.0,
) -> list[str]:
    """
    List namespace names visible through a kubeconfig context

    Args:
        kubeconfig_path: kubeconfig file to authenticate with
        context: context to use, defaults to the current context
        timeout: request timeout in seconds

    Returns:
        Namespace names as returned by the API server

    Raises:
        NamespaceListingError: if the client cannot be built or the call fails
    """
    try:
        # persist_config=False keeps token refreshes out of the kubeconfig
        with new_client_from_config(
            config_file=str(kubeconfig_path), context=context, persist_config=False
        ) as api_client:
            response = k8s_client.CoreV1Api(api_client).list_namespace(
                _request_timeout=timeout
            )
    except Exception as e:
        logger.warning(f"Failed to list namespaces: {e}")
        raise NamespaceListingError(f"Failed to list namespaces: {e}") from e

    names = [item.metadata.name for item in response.items]
    logger.debug(f"Listed {len(names)} namespace(s)")
    return names
