"""Traffic graph nodes and edges.

Nodes are built from resolved telemetry with their fields trimmed to what
is relevant for the node type, so nodes of the same type are comparable.
Edges refer to their endpoints by node ID; the owning TrafficMap resolves
those handles.
"""

from dataclasses import dataclass, field

from meshgraph.common.metrics import EDGES_CREATED, NODES_CREATED
from meshgraph.graph.identity import node_id, resolve_namespace
from meshgraph.graph.types import (
    EGRESS_CLUSTERS,
    UNKNOWN,
    GraphType,
    Metadata,
    MetadataKey,
    NodeType,
    new_metadata,
    parse_graph_type,
)


@dataclass
class Edge:
    """A directed call relationship between two nodes."""

    source_id: str
    dest_id: str
    metadata: Metadata = field(default_factory=new_metadata)


@dataclass
class Node:
    """A traffic graph node with its outgoing edges."""

    id: str
    node_type: NodeType
    namespace: str
    workload: str = ""
    app: str = ""
    version: str = ""
    service: str = ""
    edges: list[Edge] = field(default_factory=list)
    metadata: Metadata = field(default_factory=new_metadata)

    @property
    def is_egress_cluster(self) -> bool:
        """Whether this node represents proxy passthrough or blackhole routing."""
        return bool(self.metadata.get(MetadataKey.IS_EGRESS_CLUSTER.value, False))

    def add_edge(self, dest: "Node") -> Edge:
        """Allocate a new edge to dest and append it to this node's edges.

        Args:
            dest: Destination node. It is not modified.

        Returns:
            The new edge.
        """
        edge = new_edge(self, dest)
        self.edges.append(edge)
        return edge

    def find_edge(self, dest_id: str) -> Edge | None:
        """Get the first outgoing edge to the given node ID, if any."""
        for edge in self.edges:
            if edge.dest_id == dest_id:
                return edge
        return None


def new_edge(source: Node, dest: Node) -> Edge:
    """Allocate a new edge between two nodes."""
    EDGES_CREATED.inc()
    return Edge(source_id=source.id, dest_id=dest.id, metadata=new_metadata())


def new_node(
    service_namespace: str,
    service: str,
    workload_namespace: str,
    workload: str,
    app: str,
    version: str,
    graph_type: str | GraphType,
) -> Node:
    """Allocate a new node for the given telemetry.

    Raises:
        IdentityResolutionError: If no identity can be derived.
    """
    identity = node_id(
        service_namespace, service, workload_namespace, workload, app, version, graph_type,
    )
    namespace = resolve_namespace(service_namespace, workload_namespace)

    return new_node_explicit(
        identity.id, namespace, workload, app, version, service, identity.node_type, graph_type,
    )


def new_node_explicit(
    id: str,
    namespace: str,
    workload: str,
    app: str,
    version: str,
    service: str,
    node_type: str | NodeType,
    graph_type: str | GraphType,
) -> Node:
    """Allocate a new node using the provided ID and node type."""
    node = Node(
        id=id,
        node_type=NodeType(node_type),
        namespace=namespace,
        workload=workload,
        app=app,
        version=version,
        service=service,
    )
    normalize_node(node, graph_type)
    NODES_CREATED.labels(node_type=node.node_type.value).inc()
    return node


def normalize_node(node: Node, graph_type: str | GraphType) -> Node:
    """Trim the node's fields to those relevant for its node type.

    Applying this to an already normalized node changes nothing.

    Args:
        node: Node to normalize in place.
        graph_type: Graph type the node belongs to.

    Returns:
        The same node.
    """
    graph_type = parse_graph_type(graph_type)

    if node.node_type == NodeType.WORKLOAD:
        # app+version labels stay when set, they help with destination
        # rules, links and grouping
        if node.app == UNKNOWN:
            node.app = ""
        if node.version == UNKNOWN:
            node.version = ""
        node.service = ""
    elif node.node_type == NodeType.APP:
        # a versioned app node is backed by a single workload, keep its name
        if graph_type != GraphType.VERSIONED_APP:
            node.workload = ""
            node.version = ""
        node.service = ""
    elif node.node_type == NodeType.SERVICE:
        node.app = ""
        node.workload = ""
        node.version = ""

        if node.service in EGRESS_CLUSTERS:
            node.metadata[MetadataKey.IS_EGRESS_CLUSTER.value] = True

    return node
