# examples/field_lines.py
import numpy as np

from physics_lab import setup_logging
from physics_lab.field import FieldCalibration, SourceCollection, SourceKind, field_grid, trace_field_lines

setup_logging()

sources = SourceCollection()
sources.add(SourceKind.DIPOLE, (0.35, 0.5))
sources.add(SourceKind.SOLENOID, (0.7, 0.5), orientation=np.pi / 2)

X, Y, U, V = field_grid(sources, steps=20)
mag = np.hypot(U, V)
print("grid:", X.shape, "max |B|:", mag.max(), "median |B|:", np.median(mag))

for line in trace_field_lines(sources, lines_per_pole=8):
    print(f"source {line.source_id}: {len(line):3d} points, stop={line.stop}")

charges = SourceCollection()
charges.add_dipole_pair()
lines = trace_field_lines(charges, calibration=FieldCalibration.electric())
print("captured:", sum(line.stop == "captured" for line in lines), "of", len(lines))
