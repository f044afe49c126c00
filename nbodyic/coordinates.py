"""Conversion between spherical and Cartesian phase-space coordinates."""

from __future__ import annotations

import math
from collections.abc import Sequence

Coordinates = tuple[float, float, float, float, float, float]


def _unpack(coor: Sequence[float], what: str) -> Coordinates:
    values = tuple(float(v) for v in coor)
    if len(values) != 6:
        raise ValueError(f"{what} coordinates need 6 components, got {len(values)}")
    return values  # type: ignore[return-value]


def sph2cart(sph_coor: Sequence[float]) -> Coordinates:
    """Map (r, phi, theta, vr, vphi, vtheta) to (x, y, z, vx, vy, vz)."""
    r, phi, theta, vr, vphi, vtheta = _unpack(sph_coor, "Spherical")

    cosphi, sinphi = math.cos(phi), math.sin(phi)
    costheta, sintheta = math.cos(theta), math.sin(theta)

    x = r * sintheta * cosphi
    y = r * sintheta * sinphi
    z = r * costheta
    vx = sintheta * cosphi * vr - sinphi * vphi + costheta * cosphi * vtheta
    vy = sintheta * sinphi * vr + cosphi * vphi + costheta * sinphi * vtheta
    vz = costheta * vr - sintheta * vtheta
    return (x, y, z, vx, vy, vz)


def cart2sph(cart_coor: Sequence[float]) -> Coordinates:
    """Map (x, y, z, vx, vy, vz) to (r, phi, theta, vr, vphi, vtheta).

    The azimuth is returned in [0, 2*pi). At the origin the polar angle
    is undefined and comes back as NaN.
    """
    x, y, z, vx, vy, vz = _unpack(cart_coor, "Cartesian")

    r = math.sqrt(x * x + y * y + z * z)
    phi = math.atan2(y, x)
    if phi < 0:
        phi += 2.0 * math.pi
    theta = math.acos(max(-1.0, min(1.0, z / r))) if r else math.nan

    cosphi, sinphi = math.cos(phi), math.sin(phi)
    costheta, sintheta = math.cos(theta), math.sin(theta)

    vr = sintheta * cosphi * vx + sintheta * sinphi * vy + costheta * vz
    vphi = -sinphi * vx + cosphi * vy
    vtheta = costheta * cosphi * vx + costheta * sinphi * vy - sintheta * vz
    return (r, phi, theta, vr, vphi, vtheta)