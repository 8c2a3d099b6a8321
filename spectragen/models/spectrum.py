"""Spectrum data models.

Request and result containers for TASMIP spectrum generation.
"""

from __future__ import annotations

import pathlib
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from spectragen.constants import DEFAULT_FILTER_MATERIAL, DEFAULT_FILTRATION_MM


@dataclass
class SpectrumRequest:
    """Parameters for one spectrum generation call.

    Attributes:
        tube_potential: Tube voltage [kVp], 1–150.
        filtration_mm: Added filtration thickness [mm].
        filter_material: Filter material ID ("Al", "Cu", "Be").
        data_source: Attenuation data directory; *None* for bundled tables.
    """
    tube_potential: int
    filtration_mm: float = DEFAULT_FILTRATION_MM
    filter_material: str = DEFAULT_FILTER_MATERIAL
    data_source: str | pathlib.Path | None = None


@dataclass
class Spectrum:
    """Normalized photon spectrum on the 1 keV grid.

    Attributes:
        energies_keV: Bin energies [keV], 0..150.
        fluence: Relative photon fluence per bin (trapezoidal integral = 1).
        kVp: Tube voltage [kVp].
        filtration_mm: Added filtration thickness [mm].
        filter_material: Filter material ID.
    """
    energies_keV: NDArray[np.float64]
    fluence: NDArray[np.float64]
    kVp: int
    filtration_mm: float
    filter_material: str

    @property
    def mean_energy(self) -> float:
        """Fluence-weighted mean energy [keV]."""
        return float(np.sum(self.energies_keV * self.fluence) / np.sum(self.fluence))

    @property
    def peak_energy(self) -> float:
        """Energy of the most populated bin [keV]."""
        return float(self.energies_keV[int(np.argmax(self.fluence))])

    def integral(self) -> float:
        """Trapezoidal integral over the bins (1 keV spacing)."""
        return float(np.sum((self.fluence[:-1] + self.fluence[1:]) / 2.0))
