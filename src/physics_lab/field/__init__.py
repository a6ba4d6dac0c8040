# MIT License (see LICENSE)
"""
Superposed 2-D vector fields of idealized sources.

This subpackage provides:
    - Sources: SourceKind, FieldSource values and the editable SourceCollection.
    - Calibration: per-kind rendering scale factors and guard radius.
    - Evaluator: field_at, arrow grids and the parallel-plate probe.
    - Tracer: field lines seeded from positive / north poles.

Typical usage:
    from physics_lab.field import SourceCollection, SourceKind, field_at

    sources = SourceCollection()
    sources.add(SourceKind.DIPOLE, (0.5, 0.5))
    B = field_at(sources, (0.7, 0.5))
"""
from .calibration import DEFAULT_CALIBRATION, FieldCalibration
from .contributions import contribution, source_poles
from .evaluator import PlateGeometry, field_at, field_grid, parallel_plate_field, sample_field, sample_grid
from .sources import FieldSource, SourceCollection, SourceKind
from .tracer import FieldLine, StopReason, trace_field_line, trace_field_lines

__all__ = [
    # Sources
    "SourceKind",
    "FieldSource",
    "SourceCollection",
    # Calibration
    "FieldCalibration",
    "DEFAULT_CALIBRATION",
    # Evaluation
    "contribution",
    "source_poles",
    "field_at",
    "sample_field",
    "sample_grid",
    "field_grid",
    "PlateGeometry",
    "parallel_plate_field",
    # Tracing
    "StopReason",
    "FieldLine",
    "trace_field_line",
    "trace_field_lines",
]
