"""Traffic map - the aggregate node/edge graph of a telemetry pass.

A TrafficMap maps node ID to Node and owns every node it holds. Each app
node should have a unique namespace+workload; two nodes with the same
name+version in one namespace are possible but unusual.

The map is not synchronized. Workers collecting in parallel each build
their own map and combine them with merge_traffic_maps before traversal.
"""

from collections.abc import Iterator

from meshgraph.common.logging import get_logger
from meshgraph.common.metrics import TRAFFIC_MAPS_MERGED
from meshgraph.graph.nodes import Edge, Node

logger = get_logger(__name__)


class TrafficMap(dict[str, Node]):
    """Mapping of node ID to Node."""

    def add_node(self, node: Node) -> Node:
        """Insert a node unless one with the same ID already exists.

        Args:
            node: Candidate node.

        Returns:
            The node stored in the map under node.id.
        """
        return self.setdefault(node.id, node)

    def edges(self) -> Iterator[Edge]:
        """Iterate over every edge of every node."""
        for node in self.values():
            yield from node.edges

    def source_of(self, edge: Edge) -> Node:
        """Resolve an edge's source node.

        Raises:
            KeyError: If the source is not in this map.
        """
        return self[edge.source_id]

    def dest_of(self, edge: Edge) -> Node:
        """Resolve an edge's destination node.

        Raises:
            KeyError: If the destination is not in this map.
        """
        return self[edge.dest_id]

    def validate(self) -> list[Edge]:
        """Find edges whose endpoints are not in this map.

        Returns:
            Dangling edges, empty when the map is consistent.
        """
        return [
            edge for edge in self.edges()
            if edge.source_id not in self or edge.dest_id not in self
        ]


def new_traffic_map() -> TrafficMap:
    """Allocate a new, empty TrafficMap."""
    return TrafficMap()


def merge_traffic_maps(target: TrafficMap, source: TrafficMap) -> TrafficMap:
    """Merge source into target.

    Nodes missing from target are adopted as-is. For nodes present in
    both, metadata from source fills keys target does not have, and
    edges from source to destinations target's node does not already
    link to are appended.

    Args:
        target: Map receiving the nodes. Modified in place.
        source: Map to merge. Must not be used afterwards.

    Returns:
        The target map.
    """
    adopted = 0
    for node_key, node in source.items():
        existing = target.get(node_key)
        if existing is None:
            target[node_key] = node
            adopted += 1
            continue

        for key, value in node.metadata.items():
            existing.metadata.setdefault(key, value)

        for edge in node.edges:
            current = existing.find_edge(edge.dest_id)
            if current is None:
                existing.edges.append(edge)
            else:
                for key, value in edge.metadata.items():
                    current.metadata.setdefault(key, value)

    TRAFFIC_MAPS_MERGED.inc()
    logger.debug(
        "Merged traffic map",
        source_nodes=len(source),
        adopted_nodes=adopted,
        total_nodes=len(target),
    )
    return target
