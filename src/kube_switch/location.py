"""
Kubeconfig location resolution
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

from .errors import ConfigLocationError

logger = logging.getLogger(__name__)

KUBECONFIG_ENV = "KUBECONFIG"
HOME_ENV = "HOME"
DEFAULT_SUBPATH = Path(".kube") / "config"


def resolve_kubeconfig_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Determine the kubeconfig path

    KUBECONFIG is used verbatim when set and non-empty (it is never split
    into a list of files). Otherwise falls back to $HOME/.kube/config.

    Args:
        environ: Environment mapping, defaults to os.environ

    Returns:
        Path of the kubeconfig document

    Raises:
        ConfigLocationError: if neither variable yields a usable path
    """
    env = os.environ if environ is None else environ

    override = env.get(KUBECONFIG_ENV)
    if override:
        logger.debug(f"Using kubeconfig from {KUBECONFIG_ENV}: {override}")
        return Path(override)

    home = env.get(HOME_ENV)
    if not home:
        raise ConfigLocationError(f"{HOME_ENV} environment variable empty or unset")

    path = Path(home) / DEFAULT_SUBPATH
    logger.debug(f"Using default kubeconfig location: {path}")
    return path
