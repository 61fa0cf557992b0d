"""Flat flank cam from follower design values, next to a three arc cam.

Demonstrates: make_cam, CamProfile2, sample_levelset_2d
Output:       examples/cam_example.png

Mathematical identities verified:
    cam(x, y) == cam(-x, y)                         (mirror symmetry)
    cam(p) == 0 for p on the base circle below the flanks
"""
import os, sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
from mechsdf import CamProfile2, make_cam, profile_bounds, sample_levelset_2d

_RES = (256, 256)
_OUT = os.path.join(os.path.dirname(__file__), "cam_example.png")


def _render_png(panels, out_path):
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        print("  matplotlib not available, skipping PNG")
        return

    fig, axes = plt.subplots(1, len(panels), figsize=(5 * len(panels), 5), facecolor="#111")
    for ax, (title, phi, bounds) in zip(axes, panels):
        (x0, x1), (y0, y1) = bounds
        ax.imshow(phi, origin="lower", extent=(x0, x1, y0, y1), cmap="RdBu")
        ax.contour(phi, levels=[0.0], origin="lower", extent=(x0, x1, y0, y1), colors="k")
        ax.set_title(title, color="white", fontsize=10)
        ax.set_aspect("equal")
        ax.set_axis_off()
    plt.savefig(out_path, dpi=150, bbox_inches="tight", facecolor="#111")
    plt.close()
    print(f"  Saved: {out_path}")


def main():
    print("=" * 60)
    print("CAMS: flat flank (designed) and three arc")
    print("  flat flank: lift 5, duration 120 deg, max diameter 40")
    print("  three arc : distance 10, base 15, nose 10, flank 40")
    print("=" * 60)

    flat = make_cam("flat_flank", lift=5.0, duration=np.radians(120.0), max_diameter=40.0)
    arc = CamProfile2(distance=10.0, base_radius=15.0, nose_radius=10.0, flank_radius=40.0)

    print(f"\nflat flank: base={flat.base_radius:.3f} nose={flat.nose_radius:.3f} "
          f"distance={flat.distance:.3f} flank length={flat.flank_length:.3f}")
    print(f"three arc : flank centre={arc.flank_center} "
          f"theta=[{arc.theta_base:.4f}, {arc.theta_nose:.4f}]")

    ok = True
    panels = []
    for name, cam in (("flat flank", flat), ("three arc", arc)):
        bounds = profile_bounds(cam)
        phi = sample_levelset_2d(cam, bounds, _RES)
        mirrored = sample_levelset_2d(cam, ((-bounds[0][1], -bounds[0][0]), bounds[1]), _RES)[:, ::-1]
        sym_err = np.abs(phi - mirrored).max()
        base_pt = np.array([[0.0, -cam.base_radius]])
        on_base = float(cam.sdf(base_pt)[0])
        print(f"\n{name}: SDF range [{phi.min():.4f}, {phi.max():.4f}]")
        print(f"  max |f(x,y) - f(-x,y)| = {sym_err:.2e}  (should be ~0)")
        print(f"  f(0, -base_radius)    = {on_base:.2e}  (should be ~0)")
        ok = ok and sym_err < 1e-9 and abs(on_base) < 1e-9
        panels.append((name, phi, bounds))

    print("\n" + ("PASSED" if ok else "FAILED"))

    _render_png(panels, _OUT)


if __name__ == "__main__":
    main()
