"""
Mutation engine

Applies "switch current context" and "set namespace of current context"
to a KubeConfig. Each operation returns a MutationResult describing
whether the document was already in the desired state, was changed in
place, or the request was rejected (in which case it is left unchanged).
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import (
    MalformedContextError,
    MutationRejected,
    NoCurrentContextError,
    UnknownContextError,
)
from .models import KubeConfig

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """Result kinds of a mutation"""

    NOOP = "noop"
    APPLIED = "applied"
    REJECTED = "rejected"


@dataclass
class MutationResult:
    """Outcome of a single mutation request"""

    outcome: Outcome
    message: str
    rejection: Optional[MutationRejected] = None

    @property
    def applied(self) -> bool:
        return self.outcome is Outcome.APPLIED

    @property
    def rejected(self) -> bool:
        return self.outcome is Outcome.REJECTED

    @classmethod
    def reject(cls, error: MutationRejected) -> "MutationResult":
        return cls(outcome=Outcome.REJECTED, message=str(error), rejection=error)

    def raise_for_rejection(self) -> None:
        """Raise the carried rejection, if any"""
        if self.rejection is not None:
            raise self.rejection


def switch_context(document: KubeConfig, target: str) -> MutationResult:
    """Make ``target`` the current context"""
    if document.current_context == target:
        return MutationResult(Outcome.NOOP, f"Already in context {target}")

    if not document.context_exists(target):
        logger.info(f"Rejecting switch to unknown context {target}")
        return MutationResult.reject(UnknownContextError(target))

    previous = document.current_context
    document.current_context = target
    logger.debug(f"Current context {previous!r} -> {target!r}")
    return MutationResult(Outcome.APPLIED, f"Switched to context {target}")


def set_namespace(document: KubeConfig, namespace: str) -> MutationResult:
    """Set the namespace of the current context"""
    name = document.active_context_name
    if name is None:
        return MutationResult.reject(NoCurrentContextError())

    entry = document.find_context(name)
    if entry is None:
        return MutationResult.reject(
            MalformedContextError(name, "no context with that name exists")
        )
    if entry.context is None:
        return MutationResult.reject(
            MalformedContextError(name, "context entry has no details")
        )

    if entry.context.namespace == namespace:
        return MutationResult(Outcome.NOOP, f"Already in namespace {namespace}")

    entry.context.namespace = namespace
    logger.debug(f"Namespace of context {name!r} set to {namespace!r}")
    return MutationResult(Outcome.APPLIED, f"Updated namespace to {namespace}")
