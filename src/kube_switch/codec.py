"""
Kubeconfig document codec

Detects whether a kubeconfig is stored as JSON or YAML, decodes it into a
KubeConfig model and encodes it back. Format detection is a heuristic on
the first non-whitespace character and lives in one place so it can be
replaced with an explicit format declaration.
"""

import json
import logging
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from .errors import DecodeError, EncodeError
from .models import DocumentFormat, KubeConfig

logger = logging.getLogger(__name__)

TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


def _without_timestamps(resolvers: dict) -> dict:
    return {
        first: [(tag, regexp) for tag, regexp in entries if tag != TIMESTAMP_TAG]
        for first, entries in resolvers.items()
    }


class KubeconfigLoader(yaml.SafeLoader):
    """SafeLoader that keeps unquoted timestamps as strings"""


class KubeconfigDumper(yaml.SafeDumper):
    """SafeDumper that writes timestamp-like strings back unquoted"""


# Go clients read these values as plain strings
KubeconfigLoader.yaml_implicit_resolvers = _without_timestamps(
    yaml.SafeLoader.yaml_implicit_resolvers
)
KubeconfigDumper.yaml_implicit_resolvers = _without_timestamps(
    yaml.SafeDumper.yaml_implicit_resolvers
)


def _find_non_string_key(data: Any, path: str = "") -> Optional[tuple[str, Any]]:
    """Return (path, key) of the first mapping key that is not a string"""
    if isinstance(data, dict):
        for key, value in data.items():
            if not isinstance(key, str):
                return path or "<root>", key
            found = _find_non_string_key(value, f"{path}.{key}" if path else key)
            if found:
                return found
    elif isinstance(data, list):
        for index, item in enumerate(data):
            found = _find_non_string_key(item, f"{path}[{index}]")
            if found:
                return found
    return None


def detect_format(text: str) -> DocumentFormat:
    """JSON if the document opens with '{', YAML otherwise"""
    stripped = text.lstrip()
    if stripped.startswith("{"):
        return DocumentFormat.JSON
    return DocumentFormat.YAML


class DocumentCodec:
    """
    Load and dump kubeconfig documents

    Documents are written back in the format they were read in unless a
    format is forced, either per call or via ``output_format``.
    """

    def __init__(self, output_format: Optional[DocumentFormat] = None, json_indent: int = 2):
        self.output_format = output_format
        self.json_indent = json_indent

    def load(self, raw: bytes) -> KubeConfig:
        """
        Decode raw bytes into a KubeConfig

        Raises:
            DecodeError: on bad encoding, syntax errors or unexpected structure
        """
        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise DecodeError(f"kubeconfig is not valid UTF-8: {e}") from e

        fmt = detect_format(text)
        data = self._parse(text, fmt)

        if not isinstance(data, dict):
            kind = "empty document" if data is None else type(data).__name__
            raise DecodeError(f"kubeconfig must be a mapping, got {kind}")

        # Kubeconfig maps are string-keyed; other keys cannot be written back faithfully
        non_string = _find_non_string_key(data)
        if non_string:
            location, key = non_string
            raise DecodeError(
                f"kubeconfig keys must be strings, found {key!r} under {location}"
            )

        try:
            document = KubeConfig.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"invalid kubeconfig structure: {e}") from e

        document._source_format = fmt
        logger.debug(
            f"Loaded {fmt.value} kubeconfig with {len(document.context_names())} context(s)"
        )
        return document

    def _parse(self, text: str, fmt: DocumentFormat) -> Any:
        if fmt is DocumentFormat.JSON:
            try:
                return json.loads(text)
            except json.JSONDecodeError as e:
                raise DecodeError(f"malformed JSON kubeconfig: {e}") from e
        try:
            return yaml.load(text, Loader=KubeconfigLoader)
        except yaml.YAMLError as e:
            raise DecodeError(f"malformed YAML kubeconfig: {e}") from e

    def resolve_format(
        self, document: KubeConfig, fmt: Optional[DocumentFormat] = None
    ) -> DocumentFormat:
        """Pick the output format: explicit, forced, source, then YAML"""
        return fmt or self.output_format or document.source_format or DocumentFormat.YAML

    def dump(self, document: KubeConfig, fmt: Optional[DocumentFormat] = None) -> bytes:
        """
        Encode a KubeConfig into bytes

        Raises:
            EncodeError: if the document cannot be serialized
        """
        fmt = self.resolve_format(document, fmt)
        try:
            if fmt is DocumentFormat.JSON:
                text = json.dumps(
                    document.to_dict(mode="json"),
                    indent=self.json_indent,
                    ensure_ascii=False,
                )
                text += "\n"
            else:
                text = yaml.dump(
                    document.to_dict(),
                    Dumper=KubeconfigDumper,
                    default_flow_style=False,
                    sort_keys=False,
                    allow_unicode=True,
                    indent=2,
                )
        except (TypeError, ValueError, yaml.YAMLError) as e:
            raise EncodeError(f"failed to encode kubeconfig as {fmt.value}: {e}") from e

        return text.encode("utf-8")
