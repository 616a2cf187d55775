"""Traffic map builder for a telemetry collection pass.

Resolves each telemetry record to source and destination nodes,
creates or fetches them in the traffic map, and links them.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from meshgraph.common.config import GraphSettings, get_settings
from meshgraph.common.exceptions import IdentityResolutionError
from meshgraph.common.logging import get_logger
from meshgraph.common.metrics import TELEMETRY_MALFORMED, TELEMETRY_PROCESSED
from meshgraph.graph.identity import (
    NodeIdentity,
    injected_service_node_id,
    node_id,
    requested_service_node_id,
    resolve_namespace,
)
from meshgraph.graph.nodes import Edge, Node, new_node_explicit
from meshgraph.graph.traffic_map import TrafficMap, new_traffic_map
from meshgraph.graph.types import GraphType, parse_graph_type

logger = get_logger(__name__)


@dataclass
class Telemetry:
    """One observed request between a source workload and a destination."""

    source_namespace: str = ""
    source_workload: str = ""
    source_app: str = ""
    source_version: str = ""
    dest_service_namespace: str = ""
    dest_service: str = ""
    dest_workload_namespace: str = ""
    dest_workload: str = ""
    dest_app: str = ""
    dest_version: str = ""


class TrafficMapBuilder:
    """Builds a TrafficMap from a stream of telemetry.

    A builder is not thread-safe. Use one builder per worker and merge
    the resulting maps.
    """

    def __init__(
        self,
        graph_type: str | GraphType | None = None,
        settings: GraphSettings | None = None,
    ) -> None:
        """Initialize builder.

        Args:
            graph_type: Graph type to build. Defaults to the configured type.
            settings: Graph settings.

        Raises:
            InvalidGraphTypeError: If the graph type is not supported.
        """
        self._settings = settings or get_settings().graph
        self._graph_type = parse_graph_type(graph_type or self._settings.default_graph_type)
        self._traffic_map = new_traffic_map()
        self._skipped = 0
        self._logger = logger.bind(graph_type=self._graph_type.value)

    @property
    def graph_type(self) -> GraphType:
        """Graph type the nodes are resolved for."""
        return self._graph_type

    @property
    def skipped(self) -> int:
        """Number of malformed telemetry records skipped."""
        return self._skipped

    def _get_or_create(
        self,
        identity: NodeIdentity,
        namespace: str,
        workload: str,
        app: str,
        version: str,
        service: str,
    ) -> Node:
        node = self._traffic_map.get(identity.id)
        if node is None:
            node = new_node_explicit(
                identity.id, namespace, workload, app, version, service,
                identity.node_type, self._graph_type,
            )
            self._traffic_map[identity.id] = node
        return node

    def add_telemetry(self, telemetry: Telemetry) -> Edge:
        """Add one telemetry record to the map.

        Both identities are resolved before anything is inserted, so a
        malformed record leaves the map untouched.

        Args:
            telemetry: Observed request.

        Returns:
            The edge between source and destination, existing or new.

        Raises:
            IdentityResolutionError: If either endpoint cannot be resolved.
        """
        t = telemetry
        source_identity = node_id(
            t.source_namespace, "", t.source_namespace,
            t.source_workload, t.source_app, t.source_version, self._graph_type,
        )
        dest_identity = node_id(
            t.dest_service_namespace, t.dest_service, t.dest_workload_namespace,
            t.dest_workload, t.dest_app, t.dest_version, self._graph_type,
        )
        TELEMETRY_PROCESSED.labels(graph_type=self._graph_type.value).inc()

        source = self._get_or_create(
            source_identity, t.source_namespace,
            t.source_workload, t.source_app, t.source_version, "",
        )
        dest = self._get_or_create(
            dest_identity,
            resolve_namespace(t.dest_service_namespace, t.dest_workload_namespace),
            t.dest_workload, t.dest_app, t.dest_version, t.dest_service,
        )

        return source.find_edge(dest.id) or source.add_edge(dest)

    def add_all(self, telemetry: Iterable[Telemetry]) -> TrafficMap:
        """Add a stream of telemetry records.

        Malformed records are logged and skipped when the settings allow
        it, otherwise the first one aborts the pass.

        Raises:
            IdentityResolutionError: If a record is malformed and
                skip_malformed is disabled.
        """
        for record in telemetry:
            try:
                self.add_telemetry(record)
            except IdentityResolutionError as e:
                TELEMETRY_MALFORMED.labels(graph_type=self._graph_type.value).inc()
                if not self._settings.skip_malformed:
                    raise
                self._skipped += 1
                self._logger.warning(
                    "Skipping malformed telemetry",
                    error=e.message,
                    telemetry=e.telemetry,
                )

        return self._traffic_map

    def inject_service(self, namespace: str, service: str) -> Node:
        """Add a service node that has no telemetry of its own."""
        identity = injected_service_node_id(namespace, service, self._graph_type)
        return self._get_or_create(identity, namespace, "", "", "", service)

    def request_service(self, namespace: str, service: str) -> Node:
        """Add a node for a service by the name it was requested under."""
        identity = requested_service_node_id(namespace, service, self._graph_type)
        return self._get_or_create(identity, namespace, "", "", "", service)

    def build(self) -> TrafficMap:
        """Get the traffic map built so far."""
        dangling = self._traffic_map.validate()
        if dangling:
            self._logger.warning("Traffic map has dangling edges", count=len(dangling))

        self._logger.info(
            "Traffic map built",
            nodes=len(self._traffic_map),
            skipped=self._skipped,
        )
        return self._traffic_map
