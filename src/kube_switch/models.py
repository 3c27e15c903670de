"""
Core data models for kube-switch

Defines the kubeconfig document using Pydantic. Only the fields the
mutation engine reads or writes are declared; every other key is kept as
a pydantic "extra" so it survives a load/mutate/save cycle untouched,
and each mapping remembers the key order it was read with.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_serializer, model_validator


class DocumentFormat(str, Enum):
    """Serialization formats a kubeconfig can be stored in"""

    JSON = "json"
    YAML = "yaml"


class PreservingModel(BaseModel):
    """Base model that round-trips unknown keys and key order"""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    _key_order: tuple[str, ...] = PrivateAttr(default=())

    @model_validator(mode="wrap")
    @classmethod
    def remember_key_order(cls, data: Any, handler):
        instance = handler(data)
        if isinstance(data, dict):
            instance._key_order = tuple(data)
        return instance

    @model_serializer(mode="wrap")
    def serialize_in_key_order(self, handler) -> dict[str, Any]:
        data = handler(self)

        # Declared fields that were never present nor assigned are left out
        present = set(self._key_order)
        present.update(self.model_extra or {})
        fields = type(self).model_fields
        for name in self.model_fields_set:
            if name in fields:
                present.add(name)
                if fields[name].alias:
                    present.add(fields[name].alias)

        ordered = {key: data[key] for key in self._key_order if key in data}
        for key, value in data.items():
            if key in present and key not in ordered:
                ordered[key] = value
        return ordered

    def to_dict(self, mode: str = "python") -> dict[str, Any]:
        """Convert to a plain dictionary using on-disk key names"""
        return self.model_dump(mode=mode, by_alias=True)


class ContextDetails(PreservingModel):
    """Body of a context entry; cluster, user and extensions are opaque"""

    namespace: Optional[str] = None


class NamedContext(PreservingModel):
    """A named entry of the kubeconfig 'contexts' list"""

    name: str
    context: Optional[ContextDetails] = None


class KubeConfig(PreservingModel):
    """In-memory kubeconfig document"""

    current_context: Optional[str] = Field(default=None, alias="current-context")
    contexts: Optional[list[NamedContext]] = None

    _source_format: Optional[DocumentFormat] = PrivateAttr(default=None)

    @property
    def source_format(self) -> Optional[DocumentFormat]:
        """Format the document was decoded from, if it was decoded"""
        return self._source_format

    @property
    def active_context_name(self) -> Optional[str]:
        """Name of the current context, None when unset or empty"""
        return self.current_context or None

    def find_context(self, name: str) -> Optional[NamedContext]:
        """Return the first context entry with the given name"""
        for entry in self.contexts or []:
            if entry.name == name:
                return entry
        return None

    def context_exists(self, name: str) -> bool:
        """Check whether a context with the given name exists"""
        return self.find_context(name) is not None

    def current_context_details(self) -> Optional[ContextDetails]:
        """Details of the current context, None if unset, dangling or empty"""
        name = self.active_context_name
        if name is None:
            return None
        entry = self.find_context(name)
        return entry.context if entry else None

    def context_names(self) -> list[str]:
        """Context names in file order"""
        return [entry.name for entry in self.contexts or []]
