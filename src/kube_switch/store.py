"""
ConfigStore

Narrow interface over the kubeconfig file: load it, try a mutation,
persist the result. Callers never touch the file directly, so locking or
compare-and-swap can be added here without changing the mutation logic.
"""

import hashlib
import logging
from pathlib import Path
from typing import Callable, Optional

from .codec import DocumentCodec
from .config import KubeSwitchSettings, get_config
from .errors import ConcurrentModificationError, ConfigReadError
from .location import resolve_kubeconfig_path
from .models import DocumentFormat, KubeConfig
from .mutations import MutationResult, set_namespace, switch_context
from .persistence import get_writer

logger = logging.getLogger(__name__)


def _digest(raw: bytes) -> str:
    return hashlib.sha256(raw).hexdigest()


class ConfigStore:
    """File-backed kubeconfig store"""

    def __init__(
        self,
        path: Path,
        codec: Optional[DocumentCodec] = None,
        settings: Optional[KubeSwitchSettings] = None,
    ):
        self.path = Path(path)
        self.settings = settings or get_config()
        if codec is None:
            forced = self.settings.output_format
            codec = DocumentCodec(
                output_format=None if forced == "preserve" else DocumentFormat(forced)
            )
        self.codec = codec
        self.writer = get_writer(self.settings.write_mode)
        self._loaded_digest: Optional[str] = None

    @classmethod
    def from_environment(
        cls, settings: Optional[KubeSwitchSettings] = None
    ) -> "ConfigStore":
        """Create a store for the kubeconfig named by KUBECONFIG or HOME"""
        return cls(resolve_kubeconfig_path(), settings=settings)

    def _read(self) -> bytes:
        try:
            return self.path.read_bytes()
        except OSError as e:
            raise ConfigReadError(f"Reading {self.path}: {e}") from e

    def load(self) -> KubeConfig:
        """
        Read and decode the kubeconfig

        Raises:
            ConfigReadError: if the file cannot be read
            DecodeError: if the content does not parse
        """
        raw = self._read()
        document = self.codec.load(raw)
        self._loaded_digest = _digest(raw)
        logger.debug(f"Loaded kubeconfig from {self.path}")
        return document

    def persist(self, document: KubeConfig) -> None:
        """
        Encode and write the document back to the same path

        Raises:
            EncodeError: if the document cannot be encoded
            ConcurrentModificationError: if conflict checks are enabled and
                the file changed since it was loaded
            PersistError: if the write fails
        """
        data = self.codec.dump(document)

        if self.settings.check_conflicts and self._loaded_digest is not None:
            if _digest(self._read()) != self._loaded_digest:
                raise ConcurrentModificationError(self.path)

        self.writer(self.path, data)
        self._loaded_digest = _digest(data)
        logger.info(f"Wrote kubeconfig {self.path}")

    def _try(
        self, mutate: Callable[[KubeConfig, str], MutationResult], value: str
    ) -> MutationResult:
        document = self.load()
        result = mutate(document, value)
        if result.applied:
            self.persist(document)
        else:
            logger.debug(f"Nothing to write: {result.outcome.value} ({result.message})")
        return result

    def try_switch_context(self, context: str) -> MutationResult:
        """Switch the current context, persisting only when it changed"""
        return self._try(switch_context, context)

    def try_set_namespace(self, namespace: str) -> MutationResult:
        """Set the current context's namespace, persisting only when it changed"""
        return self._try(set_namespace, namespace)

    def context_names(self) -> list[str]:
        """Context names of the stored kubeconfig"""
        return self.load().context_names()
