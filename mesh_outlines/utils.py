# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2024 dairin0d https://github.com/dairin0d

import math

import numpy as np

DEFAULT_THRESHOLD_ANGLE = 1.0 # degrees
DEFAULT_PRECISION = 4 # decimal digits
DEFAULT_MERGE_TOLERANCE = 0.1

sqrt = math.sqrt
cos = math.cos
radians = math.radians

def dot_product(ax, ay, az, bx, by, bz):
    return ax*bx + ay*by + az*bz

def cross_product(ax, ay, az, bx, by, bz):
    return (ay*bz - az*by, az*bx - ax*bz, ax*by - ay*bx)

def normalize(x, y, z):
    mag = sqrt(x*x + y*y + z*z)
    return ((x/mag, y/mag, z/mag) if mag > 0.0 else (0.0, 0.0, 0.0))

def face_normal(p0, p1, p2):
    x0, y0, z0 = p0
    x1, y1, z1 = p1
    x2, y2, z2 = p2

    ax = x1 - x0; ay = y1 - y0; az = z1 - z0
    bx = x2 - x0; by = y2 - y0; bz = z2 - z0

    return normalize(*cross_product(ax, ay, az, bx, by, bz))

def distance(p0, p1):
    dx = p0[0] - p1[0]; dy = p0[1] - p1[1]; dz = p0[2] - p1[2]
    return sqrt(dx*dx + dy*dy + dz*dz)

def threshold_dot(threshold_angle):
    """
    Converts an angle between face normals (in degrees)
    to the minimal dot product of the normals
    """
    return cos(radians(threshold_angle))

def as_positions(positions):
    """
    positions: flat (x, y, z, x, y, z, ...) sequence or an (N, 3) array
    Returns a float64 array of shape (N, 3)
    """

    positions = np.asarray(positions, dtype=np.float64)
    if positions.size % 3 != 0:
        raise ValueError(f"position buffer length {positions.size} is not a multiple of 3")
    return positions.reshape(-1, 3)

def as_indices(indices):
    """
    indices: flat (i0, i1, i2, ...) sequence or an (M, 3) array
    Returns an integer array of shape (M, 3)
    """

    indices = np.asarray(indices)
    if indices.size == 0:
        indices = indices.astype(np.int64)
    elif not np.issubdtype(indices.dtype, np.integer):
        raise ValueError(f"index buffer must contain integers, got {indices.dtype}")
    if indices.size % 3 != 0:
        raise ValueError(f"index buffer length {indices.size} is not a multiple of 3")
    return indices.reshape(-1, 3)

def hash_positions(positions, precision=DEFAULT_PRECISION):
    """
    Rounds every position to the given number of decimal digits (half up).
    Returns a list of integer triples usable as dictionary keys; positions
    with equal hashes are treated as the same point
    """

    scale = 10.0 ** precision
    rounded = np.floor(positions * scale + 0.5).astype(np.int64)
    return [tuple(p) for p in rounded.tolist()]

def triangle_normals(positions, triangles):
    """
    Returns a list of unit face normals (or zero vectors for
    zero-area triangles), one for each triangle
    """

    verts = positions.tolist()
    return [face_normal(verts[vi0], verts[vi1], verts[vi2]) for vi0, vi1, vi2 in triangles.tolist()]
