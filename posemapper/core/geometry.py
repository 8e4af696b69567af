from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

_MIRROR_X = np.diag([-1.0, 1.0, 1.0])


def as_point(xyz) -> np.ndarray:
    return np.array(xyz, dtype=np.float64).reshape(3)


def distance_squared(a: np.ndarray, b: np.ndarray) -> float:
    d = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
    return float(np.dot(d, d))


def yaw_matrix(angle: float) -> np.ndarray:
    """Rotation about the vertical (y) axis by `angle` radians."""
    c = math.cos(angle)
    s = math.sin(angle)
    return np.array(
        [[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]],
        dtype=np.float64,
    )


def is_rigid(rotation, atol: float = 1e-6) -> bool:
    """True for an orthogonal 3x3 matrix (a rotation, possibly mirrored)."""
    m = np.asarray(rotation, dtype=np.float64)
    return m.shape == (3, 3) and bool(np.allclose(m.T @ m, np.eye(3), atol=atol))


@dataclass(eq=False)
class Reorientation:
    """Rigid transform x -> rotation @ x + translation.

    `rotation` is orthogonal; a determinant of -1 means the transform mirrors.
    """

    rotation: np.ndarray
    translation: np.ndarray

    def __post_init__(self) -> None:
        self.rotation = np.array(self.rotation, dtype=np.float64).reshape(3, 3)
        self.translation = as_point(self.translation)

    @classmethod
    def identity(cls) -> "Reorientation":
        return cls(np.eye(3), np.zeros(3))

    @classmethod
    def from_yaw(cls, angle: float, translation=(0.0, 0.0, 0.0)) -> "Reorientation":
        return cls(yaw_matrix(angle), translation)

    @classmethod
    def mirror_x(cls) -> "Reorientation":
        return cls(_MIRROR_X, np.zeros(3))

    @property
    def mirrored(self) -> bool:
        return float(np.linalg.det(self.rotation)) < 0.0

    def __eq__(self, other) -> bool:
        if not isinstance(other, Reorientation):
            return NotImplemented
        return bool(
            np.array_equal(self.rotation, other.rotation)
            and np.array_equal(self.translation, other.translation)
        )

    def __repr__(self) -> str:
        return (
            f"Reorientation(rotation={self.rotation.tolist()}, "
            f"translation={self.translation.tolist()})"
        )


def apply_point(r: Reorientation, xyz: np.ndarray) -> np.ndarray:
    """Map one point, or any array of points shaped (..., 3)."""
    points = np.asarray(xyz, dtype=np.float64)
    return points @ r.rotation.T + r.translation


def inverse(r: Reorientation) -> Reorientation:
    rot_t = r.rotation.T
    return Reorientation(rot_t, -(rot_t @ r.translation))


def compose(a: Reorientation, b: Reorientation) -> Reorientation:
    """`a` followed by `b`: apply_point(compose(a, b), x) == apply_point(b, apply_point(a, x))."""
    return Reorientation(
        b.rotation @ a.rotation,
        b.rotation @ a.translation + b.translation,
    )


def isclose(a: Reorientation, b: Reorientation, atol: float = 1e-9) -> bool:
    return bool(
        np.allclose(a.rotation, b.rotation, rtol=0.0, atol=atol)
        and np.allclose(a.translation, b.translation, rtol=0.0, atol=atol)
    )


def rigid_align(
    src: np.ndarray,
    dst: np.ndarray,
    *,
    allow_tilt: bool = True,
) -> Reorientation:
    """Least-squares proper rigid transform mapping `src` points onto `dst`.

    Both arrays are (N, 3) with row i of `src` corresponding to row i of `dst`.
    With `allow_tilt` the rotation is unrestricted (Kabsch); without it the
    rotation is a yaw about the vertical axis only.
    """
    src = np.asarray(src, dtype=np.float64).reshape(-1, 3)
    dst = np.asarray(dst, dtype=np.float64).reshape(-1, 3)
    src_c = src.mean(axis=0)
    dst_c = dst.mean(axis=0)
    a = src - src_c
    b = dst - dst_c

    if allow_tilt:
        h = a.T @ b
        u, _, vt = np.linalg.svd(h)
        d = 1.0 if float(np.linalg.det(vt.T @ u.T)) >= 0.0 else -1.0
        rotation = vt.T @ np.diag([1.0, 1.0, d]) @ u.T
    else:
        cos_term = float(np.sum(b[:, 0] * a[:, 0] + b[:, 2] * a[:, 2]))
        sin_term = float(np.sum(b[:, 0] * a[:, 2] - b[:, 2] * a[:, 0]))
        rotation = yaw_matrix(math.atan2(sin_term, cos_term))

    return Reorientation(rotation, dst_c - rotation @ src_c)
