"""Material database service — loads NIST XCOM data and provides μ lookup.

Loads filter material JSON files from ``data/nist_xcom/`` (or any directory
laid out the same way) and provides log-log interpolation for arbitrary
energies inside the tabulated range.

All returned μ/ρ values are in cm²/g and μ values in cm⁻¹ (core units).
Energy inputs are in keV unless the name says otherwise.
"""

from __future__ import annotations

import functools
import json
import logging
import pathlib

import numpy as np

from spectragen.constants import DEFAULT_DATA_DIR
from spectragen.core.exceptions import EnergyOutOfRangeError, MaterialNotFoundError
from spectragen.core.units import MeV_to_keV
from spectragen.models.material import AttenuationDataPoint, Material

logger = logging.getLogger(__name__)

# Material ID → JSON filename mapping
_MATERIAL_FILES: dict[str, str] = {
    "Al": "aluminum.json",
    "Be": "beryllium.json",
    "Cu": "copper.json",
}


class MaterialService:
    """Service for filter material lookup and attenuation coefficient queries.

    Loads NIST XCOM data from JSON files and provides:
    - Material metadata (name, density)
    - Mass attenuation coefficient (μ/ρ) via log-log interpolation
    - Linear attenuation coefficient (μ = μ/ρ × ρ)

    Queries outside a material's tabulated energy range are rejected
    rather than extrapolated.

    Args:
        data_dir: Path to a ``nist_xcom`` style directory.  If *None*, the
                  bundled tables are used.
    """

    def __init__(self, data_dir: str | pathlib.Path | None = None) -> None:
        if data_dir is None:
            data_dir = DEFAULT_DATA_DIR
        self._data_dir = pathlib.Path(data_dir)
        self._materials: dict[str, Material] = {}
        # Cached (log E, log μ/ρ) arrays per material
        self._log_tables: dict[str, tuple[np.ndarray, np.ndarray]] = {}
        self._load_materials()

    @property
    def data_dir(self) -> pathlib.Path:
        return self._data_dir

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_all_materials(self) -> list[Material]:
        """Return all loaded materials."""
        return list(self._materials.values())

    def get_material(self, material_id: str) -> Material:
        """Return a single material by ID.

        Raises:
            MaterialNotFoundError: If *material_id* is not loaded.
        """
        try:
            return self._materials[material_id]
        except KeyError:
            raise MaterialNotFoundError(material_id) from None

    def get_energy_range_keV(self, material_id: str) -> tuple[float, float]:
        """Return the (min, max) tabulated energy [keV] for a material."""
        data = self.get_material(material_id).attenuation_data
        return data[0].energy_keV, data[-1].energy_keV

    def get_mu_rho(self, material_id: str, energy_keV: float) -> float:
        """Mass attenuation coefficient via log-log interpolation.

        Uses ``numpy.interp`` on log(E) vs log(μ/ρ) between NIST data points.

        Args:
            material_id: Material identifier.
            energy_keV: Photon energy [keV].

        Returns:
            μ/ρ [cm²/g].

        Raises:
            MaterialNotFoundError: Unknown material.
            EnergyOutOfRangeError: Energy outside the tabulated range.
        """
        log_E, log_mu = self._log_table(material_id)
        min_keV, max_keV = self.get_energy_range_keV(material_id)
        if not (min_keV <= energy_keV <= max_keV):
            raise EnergyOutOfRangeError(material_id, energy_keV, min_keV, max_keV)

        log_query = np.log(energy_keV)
        return float(np.exp(np.interp(log_query, log_E, log_mu)))

    def get_linear_attenuation(self, material_id: str, energy_keV: float) -> float:
        """Linear attenuation coefficient μ [cm⁻¹] at *energy_keV*."""
        density = self.get_material(material_id).density
        return self.get_mu_rho(material_id, energy_keV) * density

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _log_table(self, material_id: str) -> tuple[np.ndarray, np.ndarray]:
        mat = self.get_material(material_id)
        table = self._log_tables.get(material_id)
        if table is None:
            energies = np.array([dp.energy_keV for dp in mat.attenuation_data])
            mu_rho = np.array([dp.mass_attenuation for dp in mat.attenuation_data])
            table = (np.log(energies), np.log(mu_rho))
            self._log_tables[material_id] = table
        return table

    def _load_materials(self) -> None:
        """Load all material JSON files into the cache."""
        if not self._data_dir.is_dir():
            logger.warning("Attenuation data directory not found: %s", self._data_dir)
            return
        for mat_id, filename in _MATERIAL_FILES.items():
            filepath = self._data_dir / filename
            if not filepath.exists():
                logger.warning("Material file not found: %s", filepath)
                continue
            try:
                self._load_single(mat_id, filepath)
            except (OSError, ValueError, KeyError):
                logger.exception("Failed to load material %s from %s", mat_id, filepath)

    def _load_single(self, mat_id: str, filepath: pathlib.Path) -> None:
        """Parse a single material JSON file."""
        with open(filepath, encoding="utf-8") as f:
            raw = json.load(f)

        attenuation = [
            AttenuationDataPoint(
                energy_keV=float(dp["energy_keV"]),
                mass_attenuation=float(dp["mass_attenuation"]),
            )
            for dp in raw.get("data_points", [])
        ]
        if not attenuation:
            raise ValueError(f"No attenuation data for material {mat_id!r}")
        if any(dp.energy_keV <= 0 or dp.mass_attenuation <= 0 for dp in attenuation):
            raise ValueError(f"Non-positive attenuation data for material {mat_id!r}")
        # Stable sort keeps absorption-edge pairs in file order
        attenuation.sort(key=lambda dp: dp.energy_keV)

        material = Material(
            id=raw.get("material_id", mat_id),
            name=raw.get("name", mat_id),
            symbol=raw.get("symbol", mat_id),
            atomic_number=raw.get("atomic_number", 0),
            density=float(raw.get("density_g_cm3", 0.0)),
            attenuation_data=attenuation,
        )
        self._materials[mat_id] = material
        logger.debug(
            "Loaded %s: %d points, %.4g-%.4g keV",
            mat_id, len(attenuation),
            attenuation[0].energy_keV, attenuation[-1].energy_keV,
        )


@functools.lru_cache(maxsize=None)
def _cached_service(resolved_dir: str) -> MaterialService:
    return MaterialService(resolved_dir)


def get_material_service(
    data_dir: str | pathlib.Path | None = None,
) -> MaterialService:
    """Return a shared MaterialService for *data_dir* (loaded once)."""
    if data_dir is None:
        data_dir = DEFAULT_DATA_DIR
    return _cached_service(str(pathlib.Path(data_dir).resolve()))


class NistAttenuation:
    """Attenuation provider bound to one filter material in one data source.

    The material is resolved at construction, so an unknown material fails
    before any spectrum bin is evaluated.

    Args:
        data_source: Data directory (``None`` for the bundled tables) or an
            already-built MaterialService.
        material_id: Filter material identifier, e.g. ``"Al"``.
    """

    def __init__(
        self,
        data_source: str | pathlib.Path | MaterialService | None,
        material_id: str,
    ) -> None:
        if isinstance(data_source, MaterialService):
            self._service = data_source
        else:
            self._service = get_material_service(data_source)
        self._material_id = material_id
        self._material = self._service.get_material(material_id)

    @property
    def material(self) -> Material:
        return self._material

    def linear_attenuation(self, energy_MeV: float) -> float:
        """Linear attenuation coefficient μ [cm⁻¹] at *energy_MeV*."""
        return self._service.get_linear_attenuation(
            self._material_id, MeV_to_keV(energy_MeV),
        )
