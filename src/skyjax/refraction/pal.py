"""Rigorous atmospheric refraction from a two-layer model atmosphere.

The refraction integral is evaluated numerically through a troposphere
with a constant lapse rate and an isothermal stratosphere.  Because the
integral is expensive, :func:`refco` fits the two coefficients of the
model ``dZ = A tan Z + B tan^3 Z`` from two sample zenith distances, and
:func:`refz` applies that model (with a blended high-zenith correction)
to an unrefracted zenith distance.

The method handles the optical/infrared and radio cases, switching at a
wavelength of 100 µm.  In the radio case the water vapour contribution
is much larger, so humidity matters.

All functions are traceable under ``jax.jit`` and ``jax.vmap``.

References:
    1. A. T. Sinclair, "The effect of atmospheric refraction on laser
       ranging data", *NAO Technical Note* 59, 1982.
    2. C. Hohenkerk and A. T. Sinclair, *NAO Technical Note* 63, 1985.
    3. P. T. Wallace, *SLALIB / PAL positional astronomy library*,
       routines ``sla_REFRO``, ``sla_REFCO`` and ``sla_REFZ``.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from skyjax.config import get_dtype
from skyjax.constants import C_LIGHT, DEG2RAD, HYDROGEN_LINE_FREQUENCY, RAD2DEG
from skyjax.coordinates import GeodeticPosition
from skyjax.integrators import SimpsonConfig, simpson_adaptive
from skyjax.refraction._types import AtmosphereProfile
from skyjax.refraction.atmosphere import (
    StratosphereModel,
    TroposphereModel,
    stratosphere,
    troposphere,
)
from skyjax.utils import range_pi

# 93 degrees, the largest usable zenith distance (rad)
_D93 = 1.623156204

# Universal gas constant and molecular weights of dry air and water vapour
_GCR = 8314.32
_DMD = 28.9644
_DMW = 18.0152

# Mean Earth radius (m)
_S = 6378120.0

# Exponent of temperature dependence of water vapour pressure
_DELTA = 18.36

# Heights of the tropopause and of the upper limit of refraction (m)
_HT = 11000.0
_HS = 80000.0

_MAX_STRIPS = 16384

# Sample zenith distances for refco: atan(1) and atan(4)
_ATN1 = 0.7853981633974483
_ATN4 = 1.325817663668033

# High zenith distance model used beyond 83 degrees
_Z83 = 83.0 * DEG2RAD
_C1 = 0.55445
_C2 = -0.01133
_C3 = 0.00202
_C4 = 0.28385
_C5 = 0.02390
_REF83 = (_C1 + _C2 * 7.0 + _C3 * 49.0) / (1.0 + _C4 * 7.0 + _C5 * 49.0)


def _refi(dn: Array, rdndr: Array) -> Array:
    return rdndr / (dn + rdndr)


def _zenith_distance_at(sk0: Array, r: Array, dn: Array) -> Array:
    """Zenith distance of the ray where it crosses radius ``r``."""
    sine = sk0 / (r * dn)
    return jnp.arctan2(sine, jnp.sqrt(jnp.maximum(1.0 - sine * sine, 0.0)))


def _make_integrand(layer, sk0: Array):
    """Refraction integrand over zenith distance for one atmospheric layer.

    ``layer`` maps a radius to ``(n, r dn/dr)``.  The carry is the radius
    of the previous sample point, used as the starting guess when solving
    ``r n(r) = sk0 / sin z`` for the radius of the next one.
    """

    def integrand(z, r):
        sz = jnp.sin(z)
        solvable = sz > 1e-20
        w = sk0 / jnp.where(solvable, sz, 1.0)

        def cond_fn(state):
            _rg, dr, j = state
            return (jnp.abs(dr) > 1.0) & (j < 4)

        def body_fn(state):
            rg, _dr, j = state
            dn, rdndr = layer(rg)
            dr = (rg * dn - w) / (dn + rdndr)
            return rg - dr, dr, j + 1

        rg, _, _ = jax.lax.while_loop(
            cond_fn, body_fn, (r, jnp.asarray(1.0e6, dtype=r.dtype), jnp.asarray(0, dtype=jnp.int32))
        )
        r = jnp.where(solvable, rg, r)
        dn, rdndr = layer(r)
        return _refi(dn, rdndr), r

    return integrand


def refro(
    zobs: ArrayLike,
    hm: ArrayLike,
    tdk: ArrayLike,
    pmb: ArrayLike,
    rh: ArrayLike,
    wl: ArrayLike,
    phi: ArrayLike,
    tlr: ArrayLike,
    eps: ArrayLike,
) -> Array:
    """Atmospheric refraction for radio and optical/infrared wavelengths.

    Integrates the refraction integral through a model troposphere and
    stratosphere.  Out-of-range arguments are clamped to safe values
    rather than rejected: height to -1 km .. 80 km, temperature to
    100-500 K, pressure to 0-10000 mb, humidity to 0-1, wavelength to at
    least 0.1 µm and lapse rate magnitude to 0.001-0.01 K/m.

    Args:
        zobs: Observed zenith distance of the source. Units: *rad*
        hm: Height of the observer above sea level. Units: *m*
        tdk: Ambient temperature at the observer. Units: *K*
        pmb: Pressure at the observer. Units: *mb*
        rh: Relative humidity at the observer, 0-1.
        wl: Effective wavelength of the source. Units: *µm*
        phi: Latitude of the observer. Units: *rad*
        tlr: Temperature lapse rate in the troposphere. Units: *K/m*
        eps: Precision required to terminate the integration. Units: *rad*

    Returns:
        Refraction, observed minus true zenith distance, negated when the
            range-reduced ``zobs`` is negative. Units: *rad*
    """
    _float = get_dtype()
    zobs = jnp.asarray(zobs, dtype=_float)

    zobs1 = range_pi(zobs)
    zobs2 = jnp.minimum(jnp.abs(zobs1), _D93)

    hmok = jnp.clip(jnp.asarray(hm, dtype=_float), -1e3, _HS)
    tdkok = jnp.clip(jnp.asarray(tdk, dtype=_float), 100.0, 500.0)
    pmbok = jnp.clip(jnp.asarray(pmb, dtype=_float), 0.0, 10000.0)
    rhok = jnp.clip(jnp.asarray(rh, dtype=_float), 0.0, 1.0)
    wlok = jnp.maximum(jnp.asarray(wl, dtype=_float), 0.1)
    alpha = jnp.clip(jnp.abs(jnp.asarray(tlr, dtype=_float)), 0.001, 0.01)
    tol = jnp.clip(jnp.abs(jnp.asarray(eps, dtype=_float)), 1e-12, 0.1) / 2.0

    optic = wlok < 100.0

    # Model atmosphere parameters defined at the observer
    wlsq = wlok * wlok
    gb = 9.784 * (1.0 - 0.0026 * jnp.cos(2.0 * phi) - 0.00000028 * hmok)
    a = jnp.where(
        optic,
        (287.6155 + (1.62887 + 0.01360 / wlsq) / wlsq) * 273.15e-6 / 1013.25,
        77.6890e-6,
    )
    gamal = (gb * _DMD) / _GCR
    gamma = gamal / alpha
    gamm2 = gamma - 2.0
    delm2 = _DELTA - 2.0
    tdc = tdkok - 273.15
    psat = 10.0 ** ((0.7859 + 0.03477 * tdc) / (1.0 + 0.00412 * tdc)) * (
        1.0 + pmbok * (4.5e-6 + 6.0e-10 * tdc * tdc)
    )
    has_air = pmbok > 0.0
    pwo = jnp.where(
        has_air,
        rhok * psat / (1.0 - (1.0 - rhok) * psat / jnp.where(has_air, pmbok, 1.0)),
        0.0,
    )
    w = pwo * (1.0 - _DMW / _DMD) * gamma / (_DELTA - gamma)
    c1 = a * (pmbok + w) / tdkok
    c2 = (a * w + jnp.where(optic, 11.2684e-6, 6.3938e-6) * pwo) / tdkok
    c3 = (gamma - 1.0) * alpha * c1 / tdkok
    c4 = (_DELTA - 1.0) * alpha * c2 / tdkok
    c5 = jnp.where(optic, 0.0, 375463e-6 * pwo / tdkok)
    c6 = c5 * delm2 * alpha / (tdkok * tdkok)

    # Conditions at the observer
    r0 = _S + hmok
    tropo = TroposphereModel(r0, tdkok, alpha, gamm2, delm2, c1, c2, c3, c4, c5, c6)
    _, dn0, rdndr0 = troposphere(tropo, r0)
    sk0 = dn0 * r0 * jnp.sin(zobs2)
    f0 = _refi(dn0, rdndr0)

    # Troposphere side of the tropopause
    rt = _S + jnp.maximum(_HT, hmok)
    tt, dnt, rdndrt = troposphere(tropo, rt)
    zt = _zenith_distance_at(sk0, rt, dnt)
    ft = _refi(dnt, rdndrt)

    # Stratosphere side of the tropopause
    strato = StratosphereModel(rt, tt, dnt, gamal)
    dnts, rdndrp = stratosphere(strato, rt)
    zts = _zenith_distance_at(sk0, rt, dnts)
    fts = _refi(dnts, rdndrp)

    # Upper limit of the stratosphere
    rs = jnp.asarray(_S + _HS, dtype=_float)
    dns, rdndrs = stratosphere(strato, rs)
    zs = _zenith_distance_at(sk0, rs, dns)
    fs = _refi(dns, rdndrs)

    config = SimpsonConfig(initial_strips=8, max_strips=_MAX_STRIPS, tol=tol)

    reft = simpson_adaptive(
        _make_integrand(lambda r: troposphere(tropo, r)[1:], sk0),
        zobs2, zt, f0, ft, r0, config,
    ).value
    refs = simpson_adaptive(
        _make_integrand(lambda r: stratosphere(strato, r), sk0),
        zts, zs, fts, fs, rt, config,
    ).value

    ref = reft + refs
    return jnp.where(zobs1 < 0.0, -ref, ref)


def refco(
    hm: ArrayLike,
    tdk: ArrayLike,
    pmb: ArrayLike,
    rh: ArrayLike,
    wl: ArrayLike,
    phi: ArrayLike,
    tlr: ArrayLike,
    eps: ArrayLike,
) -> tuple[Array, Array]:
    """Constants ``A`` and ``B`` of the refraction model ``dZ = A tan Z + B tan^3 Z``.

    The model is fitted to rigorous refraction at zenith distances of
    ``atan(1)`` and ``atan(4)``, which gives good accuracy up to about 80
    degrees zenith distance.  Arguments are as for :func:`refro`.

    Returns:
        tuple: ``(refa, refb)``. Units: *rad*
    """
    r1 = refro(_ATN1, hm, tdk, pmb, rh, wl, phi, tlr, eps)
    r2 = refro(_ATN4, hm, tdk, pmb, rh, wl, phi, tlr, eps)
    refa = (64.0 * r1 - r2) / 60.0
    refb = (r2 - 4.0 * r1) / 60.0
    return refa, refb


def refz(zu: ArrayLike, refa: ArrayLike, refb: ArrayLike) -> Array:
    """Refracted zenith distance from an unrefracted one.

    Applies the ``A tan Z + B tan^3 Z`` model with one Newton-Raphson
    refinement up to 83 degrees.  Beyond that the refraction at 83
    degrees is scaled by an empirical high-zenith model, so the result
    is continuous at the hand-over.  The high-zenith model is not
    extrapolated past 93 degrees.

    Args:
        zu: Unrefracted zenith distance. Units: *rad*
        refa: ``tan Z`` coefficient. Units: *rad*
        refb: ``tan^3 Z`` coefficient. Units: *rad*

    Returns:
        Refracted zenith distance. Units: *rad*
    """
    zu = jnp.asarray(zu, dtype=get_dtype())
    zu1 = jnp.minimum(zu, _Z83)

    zl = zu1
    s = jnp.sin(zl)
    c = jnp.cos(zl)
    t = s / c
    tsq = t * t
    tcu = t * tsq
    zl = zl - (refa * t + refb * tcu) / (1.0 + (refa + 3.0 * refb * tsq) / (c * c))

    s = jnp.sin(zl)
    c = jnp.cos(zl)
    t = s / c
    tsq = t * t
    tcu = t * tsq
    ref = zu1 - zl + (zl - zu1 + refa * t + refb * tcu) / (1.0 + (refa + 3.0 * refb * tsq) / (c * c))

    e = 90.0 - jnp.minimum(93.0, zu * RAD2DEG)
    e2 = e * e
    ref_high = (ref / _REF83) * (_C1 + _C2 * e + _C3 * e2) / (1.0 + _C4 * e + _C5 * e2)
    ref = jnp.where(zu > zu1, ref_high, ref)

    return zu - ref


def refraction_pal(
    alt: ArrayLike,
    pressure: ArrayLike = 1010.0,
    temperature: ArrayLike = 10.0,
    humidity: ArrayLike = 50.0,
    frequency: ArrayLike = HYDROGEN_LINE_FREQUENCY,
    latitude: ArrayLike = 0.0,
    height_above_sea_level: ArrayLike = 0.0,
    lapse_rate: ArrayLike = 6.5,
) -> Array:
    """Refraction correction from true to apparent altitude.

    More accurate than :func:`~skyjax.refraction.refraction_saemundsson`,
    and valid at radio frequencies where water vapour dominates.

    Args:
        alt: True (unrefracted) altitude. Units: *deg*
        pressure: Surface pressure. Units: *mb*
        temperature: Surface air temperature. Units: *°C*
        humidity: Relative humidity, 0-100. Units: *%*
        frequency: Observing frequency. Units: *Hz*
        latitude: Observer latitude. Units: *deg*
        height_above_sea_level: Observer height. Units: *m*
        lapse_rate: Tropospheric temperature lapse rate. Units: *K/km*

    Returns:
        Amount to add to the true altitude. Units: *deg*

    Examples:
        ```python
        from skyjax.refraction import refraction_pal
        refraction_pal(45.0, frequency=5.45e14) * 60.0  # ~0.97 arcmin
        ```
    """
    _float = get_dtype()
    alt = jnp.asarray(alt, dtype=_float)
    tdk = jnp.asarray(temperature, dtype=_float) + 273.15
    wl = (C_LIGHT / jnp.asarray(frequency, dtype=_float)) * 1.0e6
    rh = jnp.asarray(humidity, dtype=_float) / 100.0
    phi = jnp.asarray(latitude, dtype=_float) * DEG2RAD
    tlr = jnp.asarray(lapse_rate, dtype=_float) / 1000.0

    z = 90.0 - alt
    refa, refb = refco(height_above_sea_level, tdk, pressure, rh, wl, phi, tlr, 1e-10)
    zr = refz(z * DEG2RAD, refa, refb)
    return z - zr * RAD2DEG


def refraction_pal_atmosphere(
    alt: ArrayLike,
    atmosphere: AtmosphereProfile,
    frequency: ArrayLike,
    location: GeodeticPosition,
) -> Array:
    """Refraction correction for an observer and atmosphere.

    Equivalent to :func:`refraction_pal` with its arguments taken from
    ``atmosphere`` and ``location``.

    Args:
        alt: True (unrefracted) altitude. Units: *deg*
        atmosphere: Surface meteorology and lapse rate.
        frequency: Observing frequency. Units: *Hz*
        location: Observer latitude and height; longitude is unused.

    Returns:
        Amount to add to the true altitude. Units: *deg*
    """
    return refraction_pal(
        alt,
        atmosphere.pressure,
        atmosphere.temperature,
        atmosphere.humidity,
        frequency,
        location.latitude,
        location.height,
        atmosphere.lapse_rate,
    )
