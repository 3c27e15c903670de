"""
Shell completion support

``complete -C`` invokes ``kube-switch complete <command> <word> <previous>``;
the previous word tells us whether namespaces or contexts are wanted.
"""

import logging
from collections.abc import Iterable
from typing import Callable, Optional

import jinja2

from .config import KubeSwitchSettings, get_config
from .store import ConfigStore

logger = logging.getLogger(__name__)

NamespaceLister = Callable[[], list[str]]

_env = jinja2.Environment(
    loader=jinja2.PackageLoader("kube_switch", "templates"),
    autoescape=False,
    keep_trailing_newline=True,
)


def filter_candidates(candidates: Iterable[str], prefix: str) -> list[str]:
    """Keep candidates starting with ``prefix``, in their original order"""
    return [candidate for candidate in candidates if candidate.startswith(prefix)]


def complete(
    last_word: str,
    prefix: str,
    store: ConfigStore,
    list_namespaces: NamespaceLister,
    settings: Optional[KubeSwitchSettings] = None,
) -> list[str]:
    """
    Produce completion candidates

    Args:
        last_word: word preceding the one being completed (alias or command)
        prefix: partial word typed so far
        store: kubeconfig store used for context names
        list_namespaces: callable returning namespace names from the cluster
        settings: settings providing the alias names

    Raises:
        NamespaceListingError: if namespaces are wanted and listing fails
    """
    settings = settings or get_config()

    if last_word in (settings.namespace_alias, "change-namespace"):
        return filter_candidates(list_namespaces(), prefix)
    if last_word in (settings.context_alias, "change-context"):
        return filter_candidates(store.context_names(), prefix)

    logger.debug(f"No completion for {last_word!r}")
    return []


def render_completion_script(
    prog_name: str = "kube-switch", settings: Optional[KubeSwitchSettings] = None
) -> str:
    """Render the bash aliases and ``complete`` hooks"""
    settings = settings or get_config()
    template = _env.get_template("completion.bash.jinja2")
    return template.render(
        prog_name=prog_name,
        namespace_alias=settings.namespace_alias,
        context_alias=settings.context_alias,
    )
