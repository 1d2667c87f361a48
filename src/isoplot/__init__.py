from isoplot.errors import ConfigError, DomainError, IsoplotError
from isoplot.geometry import line2line, ray2sphere, segment2segment
from isoplot.isoline import IsolineConfig, IsolineResult, IsolineTracer, sdf_isoline
from isoplot.surface import RecordingSurface
from isoplot.vector import Vec2, vec2
from isoplot.viewport import Domain, Rect, Viewport

__all__ = [
    "ConfigError",
    "Domain",
    "DomainError",
    "IsolineConfig",
    "IsolineResult",
    "IsolineTracer",
    "IsoplotError",
    "Rect",
    "RecordingSurface",
    "Vec2",
    "Viewport",
    "line2line",
    "ray2sphere",
    "sdf_isoline",
    "segment2segment",
    "vec2",
]
