from isoplot.isoline.config import (
    LEAF_PX,
    SIN_45,
    IsolineConfig,
    IsolineResult,
)
from isoplot.isoline.tracer import IsolineTracer, sdf_isoline

__all__ = [
    "LEAF_PX",
    "SIN_45",
    "IsolineConfig",
    "IsolineResult",
    "IsolineTracer",
    "sdf_isoline",
]
