"""Prometheus metrics for MeshGraph.

Provides pre-defined metrics for monitoring traffic graph construction.
"""

from prometheus_client import Counter

# Graph construction metrics
NODES_CREATED = Counter(
    "meshgraph_nodes_created_total",
    "Total number of traffic graph nodes created",
    ["node_type"],
)

EDGES_CREATED = Counter(
    "meshgraph_edges_created_total",
    "Total number of traffic graph edges created",
)

TELEMETRY_PROCESSED = Counter(
    "meshgraph_telemetry_processed_total",
    "Total number of telemetry tuples processed",
    ["graph_type"],
)

TELEMETRY_MALFORMED = Counter(
    "meshgraph_telemetry_malformed_total",
    "Total number of telemetry tuples that could not be resolved",
    ["graph_type"],
)

TRAFFIC_MAPS_MERGED = Counter(
    "meshgraph_traffic_maps_merged_total",
    "Total number of traffic maps merged into another",
)

