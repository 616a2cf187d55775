"""MeshGraph - Service Mesh Traffic Graph Core.

Resolves mesh telemetry into canonical topology nodes and edges,
and assembles them into traffic graphs.
"""

__version__ = "0.1.0"
