"""Involute spur gear meshing with a gear rack.

Demonstrates: GearProfile, GearRackProfile, Union2D, translate, sample_levelset_2d
Output:       examples/gear_example.png

Mathematical identities verified:
    gear(R(2*pi/N) p) == gear(p)                     (rotational symmetry)
    rack(x + pitch, y) == rack(x, y)                 (periodic interior)
"""
import os, sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
from mechsdf import GearProfile, GearRackProfile, Union2D, profile_bounds, sample_levelset_2d
from mechsdf.primitives import rot2D

_N      = 18
_MODULE = 2.0
_RES    = (400, 300)
_OUT    = os.path.join(os.path.dirname(__file__), "gear_example.png")


def _render_png(phi, bounds, out_path, title=""):
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        print("  matplotlib not available, skipping PNG")
        return

    (x0, x1), (y0, y1) = bounds
    fig, ax = plt.subplots(figsize=(8, 6), facecolor="#111")
    ax.imshow(phi < 0, origin="lower", extent=(x0, x1, y0, y1), cmap="gray")
    ax.contour(phi, levels=[0.0], origin="lower", extent=(x0, x1, y0, y1), colors="orange")
    ax.set_title(title, color="white", fontsize=10)
    ax.set_aspect("equal")
    ax.set_axis_off()
    plt.savefig(out_path, dpi=150, bbox_inches="tight", facecolor="#111")
    plt.close()
    print(f"  Saved: {out_path}")


def main():
    print("=" * 60)
    print(f"GEAR + RACK: {_N} teeth, module {_MODULE}, 20 deg pressure angle")
    print("=" * 60)

    gear = GearProfile(_N, _MODULE, np.radians(20.0), backlash=0.1,
                       clearance=0.25 * _MODULE, ring_width=6.0, facets=12)
    rack = GearRackProfile(8.0, _MODULE, np.radians(20.0), backlash=0.1, base_height=4.0)

    print(f"\npitch r={gear.pitch_radius:.3f} base r={gear.base_radius:.3f} "
          f"outer r={gear.outer_radius:.3f} root r={gear.root_radius:.3f} "
          f"bore r={gear.ring_radius:.3f}")
    print(f"rack pitch={rack.pitch:.4f} height={rack.tooth_height:.3f} "
          f"half length={rack.half_length:.3f}")

    # rack pitch line (base + dedendum) sits on the gear pitch circle
    rack_y = -gear.pitch_radius - (4.0 + 1.25 * _MODULE)
    scene = Union2D(gear, rack.translate(0.0, rack_y))
    bounds = profile_bounds(scene)
    phi = sample_levelset_2d(scene, bounds, _RES)

    # --- mathematical verification ---
    pg = np.stack(np.meshgrid(np.linspace(-25, 25, 41), np.linspace(-25, 25, 41)), axis=-1)
    rot_err = np.abs(gear.sdf(pg @ rot2D(2 * np.pi / _N).T) - gear.sdf(pg)).max()

    xs = np.linspace(-10.0, 10.0, 41)
    pr = np.stack([xs, np.full_like(xs, 6.0)], axis=-1)
    per_err = np.abs(rack.sdf(pr + np.array([rack.pitch, 0.0])) - rack.sdf(pr)).max()

    print(f"\nSDF range : [{phi.min():.4f}, {phi.max():.4f}]")
    print(f"max |gear(Rp) - gear(p)|         = {rot_err:.2e}  (should be ~0)")
    print(f"max |rack(x+pitch) - rack(x)|    = {per_err:.2e}  (should be ~0)")

    ok = rot_err < 1e-9 and per_err < 1e-9 and phi.min() < 0 and phi.max() > 0
    print("\n" + ("PASSED" if ok else "FAILED"))

    _render_png(phi, bounds, _OUT, "Gear meshing with rack")


if __name__ == "__main__":
    main()
