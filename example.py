import logging

from mesh_outlines import SurfaceFinder, weld_mesh

def prepare_and_report(object_infos, threshold_angle=1.0):
    finder = SurfaceFinder()

    for info in object_infos:
        verts = [c for v in info["verts"] for c in v]
        tris = [i for tri in info["tris"] for i in tri]

        weld_result = weld_mesh(verts, tris, threshold_angle)
        surfaces = finder.find_surfaces(verts, weld_result["indices"], threshold_angle)

        print(f"{info['name']}: welded {weld_result['welded']} vertices, "
              f"surface ids {surfaces['first_id']}..{surfaces['last_id']}")

    print(f"normalization: {finder.normalization}")

def make_test_object(name, height, segments, split=False):
    import math
    verts = [(0.0, 0.0, height)]
    for i in range(segments+1):
        angle = (math.pi/2) * (i / (segments))
        verts.append((math.sin(angle), math.cos(angle), 0.0))
    tris = [(0, i+1, i+2) for i in range(segments)]
    if split:
        # Give every triangle its own copy of the vertices
        verts = [verts[vi] for tri in tris for vi in tri]
        tris = [(i*3, i*3+1, i*3+2) for i in range(segments)]
    return dict(name=name, verts=verts, tris=tris)

def make_cube(name, size=1.0):
    corners = [(x*size, y*size, z*size) for x in (0, 1) for y in (0, 1) for z in (0, 1)]
    quads = [(0, 1, 3, 2), (4, 6, 7, 5), (0, 4, 5, 1), (2, 3, 7, 6), (0, 2, 6, 4), (1, 5, 7, 3)]
    verts = []
    tris = []
    for a, b, c, d in quads:
        base = len(verts)
        verts.extend(corners[vi] for vi in (a, b, c, d))
        tris.append((base, base+1, base+2))
        tris.append((base, base+2, base+3))
    return dict(name=name, verts=verts, tris=tris)

object_infos = [
    make_test_object("plane", 0.0, 2, split=True),
    make_test_object("cone", 1.0, 32, split=True),
    make_cube("cube"),
]

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    prepare_and_report(object_infos)
