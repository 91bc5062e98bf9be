from .geometry import (
    Point, points_match, geodesic_length, bearing_to_north, angle_between,
    is_nearly_horizontal, is_nearly_vertical, round_half_up,
)
from .edge import EdgeType, Facet, RoofEdge, Junction, EdgeDetection
from .parameters import DetectionParams, ClassifierConfig
from .context import DetectionContext
from .catalog import (
    EdgeTypeInfo, EDGE_TYPE_CATALOG, get_edge_type_info,
    ConfidenceLevel, get_confidence_level,
)
from .measurement import SavedEdge, EdgeTotals, MeasurementEdgesPayload

__all__ = [
    "Point", "points_match", "geodesic_length", "bearing_to_north", "angle_between",
    "is_nearly_horizontal", "is_nearly_vertical", "round_half_up",
    "EdgeType", "Facet", "RoofEdge", "Junction", "EdgeDetection",
    "DetectionParams", "ClassifierConfig",
    "DetectionContext",
    "EdgeTypeInfo", "EDGE_TYPE_CATALOG", "get_edge_type_info",
    "ConfidenceLevel", "get_confidence_level",
    "SavedEdge", "EdgeTotals", "MeasurementEdgesPayload",
]
