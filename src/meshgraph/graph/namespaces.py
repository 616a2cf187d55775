"""Namespace information registry."""

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class NamespaceInfo:
    """Descriptive facts about a namespace."""

    name: str
    duration: timedelta = timedelta(0)
    is_istio: bool = False


class NamespaceInfoMap(dict[str, NamespaceInfo]):
    """Mapping of namespace name to NamespaceInfo."""

    def add(self, info: NamespaceInfo) -> None:
        """Register info, replacing any entry for the same namespace."""
        self[info.name] = info

    def get_istio_namespaces(self) -> list[str]:
        """Get the names of all namespaces that are part of the mesh.

        No ordering is guaranteed.
        """
        return [info.name for info in self.values() if info.is_istio]


def new_namespace_info_map() -> NamespaceInfoMap:
    """Allocate a new, empty NamespaceInfoMap."""
    return NamespaceInfoMap()
