"""Material database service tests.

Validates MaterialService loading, log-log interpolation, range checks,
and the NistAttenuation provider used by the spectrum generator.
"""

import json

import pytest

from spectragen.core.exceptions import (
    AttenuationLookupError,
    EnergyOutOfRangeError,
    MaterialNotFoundError,
)
from spectragen.core.material_database import (
    MaterialService,
    NistAttenuation,
    get_material_service,
)


@pytest.fixture(scope="module")
def svc() -> MaterialService:
    return MaterialService()


def _write_material(directory, filename, material_id, density, points):
    payload = {
        "material_id": material_id,
        "name": material_id,
        "symbol": material_id,
        "atomic_number": 13,
        "density_g_cm3": density,
        "data_points": [
            {"energy_keV": e, "mass_attenuation": m} for e, m in points
        ],
    }
    (directory / filename).write_text(json.dumps(payload), encoding="utf-8")


class TestMaterialLoading:
    def test_loads_all_materials(self, svc: MaterialService):
        ids = {m.id for m in svc.get_all_materials()}
        assert ids == {"Al", "Be", "Cu"}

    def test_aluminum_properties(self, svc: MaterialService):
        al = svc.get_material("Al")
        assert al.name == "Aluminum"
        assert al.density == pytest.approx(2.699)
        assert al.atomic_number == 13

    def test_attenuation_data_sorted(self, svc: MaterialService):
        for mat in svc.get_all_materials():
            energies = [dp.energy_keV for dp in mat.attenuation_data]
            assert energies == sorted(energies), f"Unsorted data for {mat.id}"

    def test_unknown_material_raises(self, svc: MaterialService):
        with pytest.raises(KeyError, match="Unknown material"):
            svc.get_material("Unobtanium")

    def test_unknown_material_is_lookup_error(self, svc: MaterialService):
        with pytest.raises(AttenuationLookupError):
            svc.get_mu_rho("Unobtanium", 50.0)

    def test_missing_directory_loads_nothing(self, tmp_path):
        svc = MaterialService(tmp_path / "nowhere")
        assert svc.get_all_materials() == []

    def test_missing_file_skipped(self, tmp_path):
        _write_material(tmp_path, "aluminum.json", "Al", 2.7, [(1.0, 10.0), (100.0, 0.1)])
        svc = MaterialService(tmp_path)
        assert [m.id for m in svc.get_all_materials()] == ["Al"]
        with pytest.raises(MaterialNotFoundError):
            svc.get_material("Cu")

    def test_malformed_file_skipped(self, tmp_path):
        (tmp_path / "aluminum.json").write_text("{not json", encoding="utf-8")
        _write_material(tmp_path, "copper.json", "Cu", 8.96, [(10.0, 200.0), (100.0, 0.5)])
        svc = MaterialService(tmp_path)
        assert [m.id for m in svc.get_all_materials()] == ["Cu"]

    def test_empty_data_points_skipped(self, tmp_path):
        _write_material(tmp_path, "aluminum.json", "Al", 2.7, [])
        svc = MaterialService(tmp_path)
        assert svc.get_all_materials() == []


class TestMuRhoInterpolation:
    """Tests for get_mu_rho log-log interpolation."""

    def test_al_exact_data_point_20keV(self, svc: MaterialService):
        assert svc.get_mu_rho("Al", 20.0) == pytest.approx(3.441, rel=1e-6)

    def test_al_exact_data_point_100keV(self, svc: MaterialService):
        assert svc.get_mu_rho("Al", 100.0) == pytest.approx(0.1704, rel=1e-6)

    def test_al_interpolated_between_points(self, svc: MaterialService):
        mu = svc.get_mu_rho("Al", 35.0)
        assert 0.5685 < mu < 1.128

    def test_log_log_midpoint(self, tmp_path):
        """Geometric midpoint in E maps to geometric mean of μ/ρ."""
        _write_material(tmp_path, "aluminum.json", "Al", 1.0, [(10.0, 100.0), (40.0, 1.0)])
        svc = MaterialService(tmp_path)
        assert svc.get_mu_rho("Al", 20.0) == pytest.approx(10.0, rel=1e-9)

    def test_monotonic_over_diagnostic_range(self, svc: MaterialService):
        """Al μ/ρ falls monotonically over the diagnostic energy range."""
        values = [svc.get_mu_rho("Al", float(e)) for e in range(10, 151)]
        assert all(a > b for a, b in zip(values, values[1:]))

    def test_cu_higher_than_al(self, svc: MaterialService):
        assert svc.get_mu_rho("Cu", 60.0) > svc.get_mu_rho("Al", 60.0)

    def test_linear_attenuation_uses_density(self, svc: MaterialService):
        mu = svc.get_linear_attenuation("Al", 100.0)
        assert mu == pytest.approx(0.1704 * 2.699, rel=1e-6)


class TestEnergyRange:
    def test_energy_range(self, svc: MaterialService):
        assert svc.get_energy_range_keV("Al") == (1.0, 20000.0)
        assert svc.get_energy_range_keV("Cu") == (10.0, 10000.0)

    def test_below_range_raises(self, svc: MaterialService):
        with pytest.raises(EnergyOutOfRangeError, match="outside tabulated range"):
            svc.get_mu_rho("Cu", 9.0)

    def test_above_range_raises(self, svc: MaterialService):
        with pytest.raises(EnergyOutOfRangeError):
            svc.get_mu_rho("Al", 25000.0)

    def test_zero_energy_raises(self, svc: MaterialService):
        with pytest.raises(EnergyOutOfRangeError):
            svc.get_mu_rho("Al", 0.0)

    def test_range_error_is_lookup_error(self, svc: MaterialService):
        with pytest.raises(AttenuationLookupError):
            svc.get_mu_rho("Cu", 5.0)


class TestNistAttenuation:
    def test_queries_in_mev(self, svc: MaterialService):
        provider = NistAttenuation(svc, "Al")
        assert provider.linear_attenuation(0.1) == pytest.approx(
            svc.get_linear_attenuation("Al", 100.0)
        )

    def test_bundled_source(self):
        provider = NistAttenuation(None, "Al")
        assert provider.material.id == "Al"
        assert provider.linear_attenuation(0.02) == pytest.approx(3.441 * 2.699, rel=1e-6)

    def test_directory_source(self, tmp_path):
        _write_material(tmp_path, "beryllium.json", "Be", 2.0, [(1.0, 4.0), (200.0, 4.0)])
        provider = NistAttenuation(tmp_path, "Be")
        assert provider.linear_attenuation(0.05) == pytest.approx(8.0)

    def test_unknown_material_fails_at_construction(self):
        with pytest.raises(MaterialNotFoundError):
            NistAttenuation(None, "Unobtanium")

    def test_shared_service_cached(self):
        assert get_material_service() is get_material_service(None)
