"""Where generated accessors keep attribute values.

Instance attributes live in a per-instance mapping keyed by attribute name. Class
attributes live in a single cell shared by the class, its subclasses and all their
instances. Neither is synchronized: mutate them from a single thread, or lock externally.
"""

from types import MappingProxyType
from typing import Any, Mapping

STORAGE_ATTRIBUTE = "__classmeta_values__"


def instance_storage(target: Any) -> dict[str, Any]:
    """Per-instance mapping of attribute values, created on first use."""
    return vars(target).setdefault(STORAGE_ATTRIBUTE, {})


class InstanceStorage:
    """Values of one attribute, one per instance."""

    def __init__(self, name: str) -> None:
        self.name = name

    def get(self, target: Any) -> Any:
        return instance_storage(target).get(self.name)

    def set(self, target: Any, value: Any) -> None:
        instance_storage(target)[self.name] = value

    def view(self, target: Any) -> Mapping[str, Any]:
        """Storage handle given to validation checks."""
        return instance_storage(target)


class ClassStorage:
    """Value of one class attribute. The target is ignored: every target shares the cell."""

    def __init__(self, name: str, value: Any = None) -> None:
        self.name = name
        self.value = value

    def get(self, _target: Any) -> Any:
        return self.value

    def set(self, _target: Any, value: Any) -> None:
        self.value = value

    def view(self, _target: Any) -> Mapping[str, Any]:
        return MappingProxyType({self.name: self.value})


type Storage = InstanceStorage | ClassStorage
