"""Spectrum models — TASMIP tungsten-anode spectrum with filtration.

Evaluates the TASMIP per-bin yield polynomials at the requested tube
potential, applies Beer-Lambert filtration through a single added filter
(μ from an attenuation provider), and normalizes the result so that its
trapezoidal integral over the 1 keV grid equals one.

All internal computations in core units: cm, keV.  Attenuation providers
are queried in MeV.
"""

from __future__ import annotations

import logging
import math
import numbers
import pathlib
from typing import Callable, Protocol

import numpy as np
from numpy.typing import NDArray

from spectragen.constants import (
    DEFAULT_FILTER_MATERIAL,
    MAX_TUBE_POTENTIAL_KVP,
    MIN_TUBE_POTENTIAL_KVP,
    NUM_ENERGY_BINS,
)
from spectragen.core.exceptions import InputValidationError, UnnormalizableSpectrumError
from spectragen.core.material_database import MaterialService, NistAttenuation
from spectragen.core.tasmip_data import ENERGY_BINS_KEV, TASMIP_POLYNOMIALS
from spectragen.core.units import keV_to_MeV, mm_to_cm
from spectragen.models.spectrum import Spectrum, SpectrumRequest

logger = logging.getLogger(__name__)


# ── Attenuation provider contract ───────────────────────────────────

class AttenuationProvider(Protocol):
    """Linear attenuation lookup bound to one filter material."""

    def linear_attenuation(self, energy_MeV: float) -> float:
        """Linear attenuation coefficient μ [cm⁻¹] at *energy_MeV*."""
        ...


ProviderFactory = Callable[..., AttenuationProvider]


# ── Core routine ────────────────────────────────────────────────────

def trapezoid_integral(values: NDArray[np.float64]) -> float:
    """Trapezoidal integral over adjacent bin pairs (unit spacing)."""
    return float(np.sum((values[:-1] + values[1:]) / 2.0))


def _validate(tube_potential: int, filtration_mm: float) -> None:
    if isinstance(tube_potential, bool) or not isinstance(tube_potential, numbers.Integral):
        raise InputValidationError(
            f"Tube potential must be an integer kVp, got {tube_potential!r}."
        )
    if not MIN_TUBE_POTENTIAL_KVP <= tube_potential <= MAX_TUBE_POTENTIAL_KVP:
        raise InputValidationError(
            f"Tube potential {tube_potential} kVp outside supported range "
            f"[{MIN_TUBE_POTENTIAL_KVP}, {MAX_TUBE_POTENTIAL_KVP}] kVp."
        )
    if isinstance(filtration_mm, bool):
        raise InputValidationError(
            f"Filtration thickness must be a number, got {filtration_mm!r}."
        )
    try:
        thickness = float(filtration_mm)
    except (TypeError, ValueError):
        raise InputValidationError(
            f"Filtration thickness must be a number, got {filtration_mm!r}."
        ) from None
    if not math.isfinite(thickness) or thickness < 0:
        raise InputValidationError(
            f"Filtration thickness must be finite and >= 0 mm, got {filtration_mm!r}."
        )


def tasmip_spectrum(
    tube_potential: int,
    filtration_mm: float = 0.0,
    filter_material: str = DEFAULT_FILTER_MATERIAL,
    data_source: str | pathlib.Path | MaterialService | None = None,
    provider_factory: ProviderFactory = NistAttenuation,
) -> NDArray[np.float64]:
    """Generate a normalized TASMIP spectrum on the 0..150 keV grid.

    Pipeline, per bin n [keV]:
      1. Zero if the fit does not model the bin or n >= kVp
      2. μ(n) from the provider, queried at n / 1000 MeV
      3. Yield polynomial evaluated at kVp, clipped at 0, x exp(-μ * thickness_cm)
    then divide every bin by the trapezoidal integral.

    Args:
        tube_potential: Tube voltage [kVp], 1–150.
        filtration_mm: Added filtration thickness [mm].
        filter_material: Filter material ID.
        data_source: Attenuation data location, passed through to
            *provider_factory*.
        provider_factory: ``factory(data_source, filter_material)`` returning
            an AttenuationProvider.

    Returns:
        Array of 151 relative fluence values.

    Raises:
        InputValidationError: kVp outside 1–150 or negative filtration.
        UnnormalizableSpectrumError: Every bin evaluates to zero.
        AttenuationLookupError: Propagated from the provider.
    """
    _validate(tube_potential, filtration_mm)
    thickness_cm = mm_to_cm(float(filtration_mm))

    provider = provider_factory(data_source, filter_material)

    phi = np.zeros(NUM_ENERGY_BINS, dtype=np.float64)
    for n, entry in enumerate(TASMIP_POLYNOMIALS):
        if entry.degree == 0 or n >= tube_potential:
            continue
        mu = provider.linear_attenuation(keV_to_MeV(n))
        attenuation = math.exp(-mu * thickness_cm)
        # fitted yields below the low-energy threshold go negative; clip at 0
        phi[n] = max(entry.evaluate(tube_potential), 0.0) * attenuation

    total = trapezoid_integral(phi)
    if total == 0.0:
        raise UnnormalizableSpectrumError(tube_potential)

    logger.debug(
        "TASMIP spectrum: %d kVp, %.4g mm %s, integral %.6g",
        tube_potential, filtration_mm, filter_material, total,
    )
    return phi / total


# ── Spectrum Generator ──────────────────────────────────────────────

class TasmipSpectrum:
    """TASMIP spectrum generator bound to one attenuation data source.

    Args:
        material_service: Material database for μ lookups.  If *None*, the
            shared service for *data_source* is used.
        data_source: Attenuation data directory used when no service is
            given.  *None* selects the bundled tables.
    """

    def __init__(
        self,
        material_service: MaterialService | None = None,
        data_source: str | pathlib.Path | None = None,
    ) -> None:
        self._materials = material_service
        self._data_source = data_source

    def generate(self, request: SpectrumRequest) -> Spectrum:
        """Generate the filtered spectrum described by *request*.

        ``request.data_source`` overrides the generator's own source.
        """
        if request.data_source is not None:
            source = request.data_source
        elif self._materials is not None:
            source = self._materials
        else:
            source = self._data_source

        fluence = tasmip_spectrum(
            request.tube_potential,
            request.filtration_mm,
            request.filter_material,
            source,
        )
        return Spectrum(
            energies_keV=ENERGY_BINS_KEV.copy(),
            fluence=fluence,
            kVp=request.tube_potential,
            filtration_mm=float(request.filtration_mm),
            filter_material=request.filter_material,
        )

    def generate_unfiltered(self, tube_potential: int) -> Spectrum:
        """Generate the spectrum with no added filtration."""
        return self.generate(SpectrumRequest(tube_potential=tube_potential))

    def mean_energy(self, request: SpectrumRequest) -> float:
        """Fluence-weighted mean energy of the filtered spectrum [keV].

        E_mean = sum(E_i * phi_i) / sum(phi_i)
        """
        return self.generate(request).mean_energy
