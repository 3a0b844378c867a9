# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "skyjax[cuda13]"]
#
# [tool.uv.sources]
# skyjax = { path = ".." }
# ///
"""Sky positions, refraction and LSRK correction for a radio observer.

Computes the Sun and Moon positions for an observer over a span of time
using a vmap'd evaluation, then reports the pointing, refraction and
velocity correction to the kinematic Local Standard of Rest for a target
given in J2000 equatorial coordinates.

Requires skyjax to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/sky_position.py [OPTIONS]

Examples:
    # Hydrogen-line observation of Cygnus from Jodrell Bank, now
    uv run examples/sky_position.py --latitude 53.2365 --longitude -2.3085 \\
        --ra 20.5 --dec 40.0

    # Fixed time, sampled every 10 minutes for a day
    uv run examples/sky_position.py --time 2024-06-21T00:00:00Z --hours 24 --step 600
"""

import time
from typing import Annotated

import jax
import jax.numpy as jnp
import typer

from skyjax import (
    HYDROGEN_LINE_FREQUENCY,
    AtmosphereProfile,
    Epoch,
    GeodeticPosition,
    RADec,
    equatorial_to_galactic,
    moon_position,
    observer_velocity_lsrk,
    ra_dec_to_az_alt,
    refraction_pal_atmosphere,
    refraction_saemundsson,
    set_dtype,
    sun_position,
    sunrise,
)

set_dtype(jnp.float64)  # Must be before any JIT compilation


def main(
    latitude: Annotated[float, typer.Option(help="Observer latitude in degrees")] = 51.4779,
    longitude: Annotated[float, typer.Option(help="Observer longitude in degrees, east positive")] = -0.0015,
    height: Annotated[float, typer.Option(help="Observer height above sea level in metres")] = 0.0,
    ra: Annotated[float, typer.Option(help="Target J2000 right ascension in hours")] = 20.5,
    dec: Annotated[float, typer.Option(help="Target J2000 declination in degrees")] = 40.0,
    frequency: Annotated[float, typer.Option(help="Observing frequency in Hz")] = HYDROGEN_LINE_FREQUENCY,
    when: Annotated[
        str | None, typer.Option("--time", help="UTC start time, YYYY-MM-DDTHH:MM:SSZ (default: now)")
    ] = None,
    hours: Annotated[float, typer.Option(help="Span to sample Sun and Moon over, in hours")] = 12.0,
    step: Annotated[float, typer.Option(help="Sample interval in seconds")] = 900.0,
    pressure: Annotated[float, typer.Option(help="Surface pressure in mb")] = 1010.0,
    temperature: Annotated[float, typer.Option(help="Surface temperature in Celsius")] = 10.0,
    humidity: Annotated[float, typer.Option(help="Relative humidity in percent")] = 50.0,
) -> None:
    """Report Sun, Moon and target positions for an observer."""
    epc = Epoch(when) if when is not None else Epoch.now()
    location = GeodeticPosition(latitude, longitude, height)
    atmosphere = AtmosphereProfile(pressure, temperature, humidity)
    print(f"Epoch: {epc}  (JD {float(epc.jd()):.5f})")
    print(f"Observer: lat={latitude:.4f} lon={longitude:.4f} h={height:.0f} m")

    # ── Sun and Moon over the span ───────────────────────────────────────
    offsets = jnp.arange(0.0, hours * 3600.0 + step, step)

    @jax.jit
    def _bodies(dt):
        t = epc + dt
        sun_aa, _ = sun_position(t, latitude, longitude)
        moon_aa, _ = moon_position(t, latitude, longitude)
        return sun_aa.alt, moon_aa.alt

    t0 = time.perf_counter()
    sun_alt, moon_alt = jax.vmap(_bodies)(offsets)
    sun_alt.block_until_ready()
    print(f"\nSampled {offsets.shape[0]} times in {time.perf_counter() - t0:.2f}s")

    i_sun = int(jnp.argmax(sun_alt))
    i_moon = int(jnp.argmax(moon_alt))
    print(f"  Sun:  max alt {float(sun_alt[i_sun]):6.2f} deg at {epc + float(offsets[i_sun])}")
    print(f"  Moon: max alt {float(moon_alt[i_moon]):6.2f} deg at {epc + float(offsets[i_moon])}")

    rise, set_ = sunrise(epc, latitude, longitude)
    print(f"  Sunrise {rise}  Sunset {set_}")

    # ── Target ───────────────────────────────────────────────────────────
    target = RADec(ra, dec)
    aa = ra_dec_to_az_alt(target, latitude, longitude, epc)
    l, b = equatorial_to_galactic(ra, dec)
    print(f"\nTarget RA {ra:.4f} h  Dec {dec:.4f} deg  (l={float(l):.3f} b={float(b):.3f})")
    print(f"  Az {float(aa.az):7.3f} deg  Alt {float(aa.alt):7.3f} deg")

    if float(aa.alt) > 0.0:
        r_pal = refraction_pal_atmosphere(aa.alt, atmosphere, frequency, location)
        r_opt = refraction_saemundsson(aa.alt, pressure, temperature)
        print(f"  Refraction: {float(r_pal) * 60.0:.3f}' at {frequency / 1e6:.3f} MHz, "
              f"{float(r_opt) * 60.0:.3f}' optical")
    else:
        print("  Target is below the horizon")

    v_lsrk = observer_velocity_lsrk(target, latitude, longitude, epc)
    print(f"  Observer velocity towards target (LSRK): {float(v_lsrk):.3f} km/s")

    print("\nDone.")


if __name__ == "__main__":
    typer.run(main)
