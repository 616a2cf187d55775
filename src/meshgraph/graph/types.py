"""Shared graph vocabulary.

Graph variants, node kinds, the telemetry sentinel values and the small
value types shared by the resolver and the traffic map.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from meshgraph.common.exceptions import InvalidGraphTypeError

# Istio label value for anything telemetry could not attribute
UNKNOWN = "unknown"

# Identifier of the special traffic generator node
UNKNOWN_SOURCE_ID = "unknown_source"

# Proxy routing sentinels reported as destination service names
PASSTHROUGH_CLUSTER = "PassthroughCluster"
BLACKHOLE_CLUSTER = "BlackHoleCluster"
EGRESS_CLUSTERS = frozenset({PASSTHROUGH_CLUSTER, BLACKHOLE_CLUSTER})


class GraphType(str, Enum):
    """Aggregation mode of a traffic graph."""

    APP = "app"
    SERVICE = "service"  # built as a workload graph, then condensed
    VERSIONED_APP = "versionedApp"
    WORKLOAD = "workload"


class NodeType(str, Enum):
    """Classification of a traffic graph node."""

    APP = "app"
    SERVICE = "service"
    UNKNOWN = "unknown"
    WORKLOAD = "workload"


class MetadataKey(str, Enum):
    """Well-known metadata keys."""

    IS_EGRESS_CLUSTER = "isEgressCluster"


Metadata = dict[str, Any]


def new_metadata() -> Metadata:
    """Allocate an empty metadata mapping."""
    return {}


def is_ok(value: str | None) -> bool:
    """Check whether a telemetry value is usable.

    Args:
        value: Raw telemetry field value.

    Returns:
        False for empty values and the unknown sentinel.
    """
    return bool(value) and value != UNKNOWN


def parse_graph_type(value: str | GraphType) -> GraphType:
    """Convert a graph type string to a GraphType.

    Args:
        value: Graph type as given in configuration or query parameters.

    Returns:
        Matching GraphType.

    Raises:
        InvalidGraphTypeError: If the value is not a supported graph type.
    """
    try:
        return GraphType(value)
    except ValueError as e:
        raise InvalidGraphTypeError(
            message=f"Invalid graph type: {value!r}",
            details={"graph_type": value, "supported": [g.value for g in GraphType]},
            cause=e,
        ) from e


@dataclass(frozen=True)
class ServiceName:
    """A service identified by namespace and name."""

    namespace: str
    name: str

    @property
    def key(self) -> str:
        """Composite lookup key."""
        return f"{self.namespace} {self.name}"
