"""Traffic graph core - node identity, nodes and edges, traffic maps.

This module turns mesh telemetry into canonical graph nodes and
assembles them into traffic maps.
"""

from meshgraph.graph.builder import Telemetry, TrafficMapBuilder
from meshgraph.graph.identity import (
    NodeIdentity,
    injected_service_node_id,
    node_id,
    requested_service_node_id,
)
from meshgraph.graph.namespaces import NamespaceInfo, NamespaceInfoMap, new_namespace_info_map
from meshgraph.graph.nodes import Edge, Node, new_edge, new_node, new_node_explicit, normalize_node
from meshgraph.graph.traffic_map import TrafficMap, merge_traffic_maps, new_traffic_map
from meshgraph.graph.types import (
    UNKNOWN,
    GraphType,
    MetadataKey,
    NodeType,
    ServiceName,
    is_ok,
)

__all__ = [
    # Types
    "UNKNOWN",
    "GraphType",
    "NodeType",
    "MetadataKey",
    "ServiceName",
    "is_ok",
    # Identity
    "NodeIdentity",
    "node_id",
    "injected_service_node_id",
    "requested_service_node_id",
    # Nodes
    "Node",
    "Edge",
    "new_node",
    "new_node_explicit",
    "new_edge",
    "normalize_node",
    # Traffic map
    "TrafficMap",
    "new_traffic_map",
    "merge_traffic_maps",
    # Namespaces
    "NamespaceInfo",
    "NamespaceInfoMap",
    "new_namespace_info_map",
    # Builder
    "Telemetry",
    "TrafficMapBuilder",
]
