"""
Error taxonomy for kube-switch

Failures fall into distinct classes so the CLI can tell a user-facing
validation rejection apart from an I/O failure or a failed write.
"""


class KubeSwitchError(Exception):
    """Base exception for all kube-switch errors"""


class ConfigLocationError(KubeSwitchError):
    """The kubeconfig path cannot be determined from the environment"""


class ConfigReadError(KubeSwitchError):
    """The kubeconfig file exists in theory but cannot be read"""


class DecodeError(KubeSwitchError):
    """The kubeconfig content does not parse as JSON or YAML"""


class EncodeError(KubeSwitchError):
    """The in-memory kubeconfig cannot be serialized"""


class MutationRejected(KubeSwitchError):
    """A requested mutation failed validation; the document is unchanged"""


class UnknownContextError(MutationRejected):
    """The target context is not present in the kubeconfig"""

    def __init__(self, context: str):
        self.context = context
        super().__init__(
            f"Context {context} does not exist, refusing to update kubeconfig"
        )


class NoCurrentContextError(MutationRejected):
    """No current context is selected, so there is nothing to set a namespace on"""

    def __init__(self):
        super().__init__("No current context set, can not update namespace")


class MalformedContextError(MutationRejected):
    """The current context is dangling or carries no context details"""

    def __init__(self, context: str, reason: str):
        self.context = context
        self.reason = reason
        super().__init__(f"Current context {context} is malformed: {reason}")


class PersistError(KubeSwitchError):
    """Writing the mutated kubeconfig failed; on-disk state may be inconsistent"""

    def __init__(self, path, message: str, may_be_inconsistent: bool = True):
        self.path = path
        self.may_be_inconsistent = may_be_inconsistent
        text = f"Failed to write {path}: {message}"
        if may_be_inconsistent:
            text += ". The file may be in an inconsistent state, inspect it manually"
        super().__init__(text)


class ConcurrentModificationError(PersistError):
    """The kubeconfig changed on disk between load and persist; nothing was written"""

    def __init__(self, path):
        super().__init__(
            path,
            "file was modified by another process since it was read",
            may_be_inconsistent=False,
        )


class NamespaceListingError(KubeSwitchError):
    """Querying the cluster for namespace names failed"""


class SettingsError(KubeSwitchError):
    """The kube-switch settings or logging configuration is invalid"""
