"""Node identity resolution.

Maps a telemetry tuple and graph type to the canonical node ID and node
type. The same inputs always produce the same identity, and the ID prefix
encodes the node type so distinct identities never collide:

- ``unknown_source``: traffic whose origin could not be attributed
- ``svc_<ns>_<service>`` / ``requested_svc_<ns>_<service>``: service nodes
- ``wl_<ns>_<workload>``: workload nodes
- ``app_<ns>_<app>``: app nodes, all versions aggregated
- ``vapp_<ns>_<workload>`` / ``vapp_<ns>_<app>_<version>``: versioned app nodes
"""

from typing import NamedTuple

from meshgraph.common.exceptions import IdentityResolutionError
from meshgraph.graph.types import (
    UNKNOWN,
    UNKNOWN_SOURCE_ID,
    GraphType,
    NodeType,
    is_ok,
    parse_graph_type,
)


class NodeIdentity(NamedTuple):
    """Resolved node ID and node type."""

    id: str
    node_type: NodeType


def resolve_namespace(service_namespace: str, workload_namespace: str) -> str:
    """Prefer the workload namespace, falling back to the service namespace."""
    if is_ok(workload_namespace):
        return workload_namespace
    return service_namespace


def node_id(
    service_namespace: str,
    service: str,
    workload_namespace: str,
    workload: str,
    app: str,
    version: str,
    graph_type: str | GraphType,
) -> NodeIdentity:
    """Generate the node ID and node type for the given telemetry.

    Raises:
        IdentityResolutionError: If none of workload, app or service is usable.
        InvalidGraphTypeError: If the graph type is not supported.
    """
    return _node_id(
        service_namespace, service, False,
        workload_namespace, workload, app, version, graph_type,
    )


def injected_service_node_id(
    service_namespace: str,
    service: str,
    graph_type: str | GraphType,
) -> NodeIdentity:
    """Generate the identity of an injected service node.

    The node type is always service.
    """
    return _node_id(service_namespace, service, False, "", "", "", "", graph_type)


def requested_service_node_id(
    service_namespace: str,
    service: str,
    graph_type: str | GraphType,
) -> NodeIdentity:
    """Generate the identity of a requested service node.

    The node type is always service; only the ID prefix differs from an
    injected service node.
    """
    return _node_id(service_namespace, service, True, "", "", "", "", graph_type)


def _node_id(
    service_namespace: str,
    service: str,
    is_requested_service: bool,
    workload_namespace: str,
    workload: str,
    app: str,
    version: str,
    graph_type: str | GraphType,
) -> NodeIdentity:
    graph_type = parse_graph_type(graph_type)
    namespace = resolve_namespace(service_namespace, workload_namespace)

    # special-case "unknown" source node
    if namespace == UNKNOWN and workload == UNKNOWN and app == UNKNOWN and service == "":
        return NodeIdentity(UNKNOWN_SOURCE_ID, NodeType.UNKNOWN)

    # A request to an unknown destination, e.g. an ingress request to an
    # unknown path. The namespace may or may not be unknown. One such
    # service node is allowed per namespace.
    if workload == UNKNOWN and app == UNKNOWN and service == UNKNOWN:
        return NodeIdentity(f"svc_{namespace}_unknown", NodeType.SERVICE)

    workload_ok = is_ok(workload)
    app_ok = is_ok(app)
    service_ok = is_ok(service)

    if not workload_ok and not app_ok and not service_ok:
        raise _resolution_error(
            service_namespace, service, workload_namespace, workload, app, version, graph_type,
        )

    svc_prefix = "requested_svc" if is_requested_service else "svc"

    # service graphs are initially processed as workload graphs
    if graph_type in (GraphType.WORKLOAD, GraphType.SERVICE):
        if not workload_ok and not service_ok:
            raise _resolution_error(
                service_namespace, service, workload_namespace, workload, app, version, graph_type,
            )
        if not workload_ok:
            return NodeIdentity(f"{svc_prefix}_{namespace}_{service}", NodeType.SERVICE)
        return NodeIdentity(f"wl_{namespace}_{workload}", NodeType.WORKLOAD)

    if app_ok:
        # Workload is a more stable key than label values when available.
        # It is missing for e.g. the root of a node graph or an app box.
        if graph_type == GraphType.VERSIONED_APP:
            if workload_ok:
                return NodeIdentity(f"vapp_{namespace}_{workload}", NodeType.APP)
            if is_ok(version):
                return NodeIdentity(f"vapp_{namespace}_{app}_{version}", NodeType.APP)
        return NodeIdentity(f"app_{namespace}_{app}", NodeType.APP)

    if workload_ok:
        return NodeIdentity(f"wl_{namespace}_{workload}", NodeType.WORKLOAD)

    return NodeIdentity(f"{svc_prefix}_{namespace}_{service}", NodeType.SERVICE)


def _resolution_error(
    service_namespace: str,
    service: str,
    workload_namespace: str,
    workload: str,
    app: str,
    version: str,
    graph_type: GraphType,
) -> IdentityResolutionError:
    telemetry = {
        "service_namespace": service_namespace,
        "service": service,
        "workload_namespace": workload_namespace,
        "workload": workload,
        "app": app,
        "version": version,
        "graph_type": graph_type.value,
    }
    return IdentityResolutionError(
        telemetry,
        message=(
            f"Failed ID gen: namespace=[{resolve_namespace(service_namespace, workload_namespace)}] "
            f"workload=[{workload}] app=[{app}] version=[{version}] "
            f"service=[{service}] graphType=[{graph_type.value}]"
        ),
    )
