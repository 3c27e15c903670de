"""
kube-switch - switch the active kubeconfig context and namespace

Loads the kubeconfig named by KUBECONFIG (or ~/.kube/config), applies a
context or namespace change, and writes it back in the format it was read.
"""

__version__ = "0.1.0"

# Core API exports
from .codec import DocumentCodec
from .config import KubeSwitchSettings
from .models import DocumentFormat, KubeConfig
from .mutations import MutationResult, Outcome, set_namespace, switch_context
from .store import ConfigStore

__all__ = [
    "ConfigStore",
    "DocumentCodec",
    "DocumentFormat",
    "KubeConfig",
    "KubeSwitchSettings",
    "MutationResult",
    "Outcome",
    "set_namespace",
    "switch_context",
    "__version__",
]
