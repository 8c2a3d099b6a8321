"""Spectrum generation error taxonomy.

Every error is fatal for the request that raised it; nothing is retried
or replaced with a default spectrum.
"""


class SpectrumError(Exception):
    """Base exception for spectrum generation."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


# Input validation
class InputValidationError(SpectrumError, ValueError):
    """Raised when a generation request is outside the supported domain."""


# Normalization
class UnnormalizableSpectrumError(SpectrumError, ArithmeticError):
    """Raised when the pre-normalization spectrum integrates to zero."""
    def __init__(self, tube_potential: int):
        self.tube_potential = tube_potential
        super().__init__(
            f"Unnormalizable spectrum: the {tube_potential} kVp spectrum integrates to zero."
        )


# Attenuation lookup
class AttenuationLookupError(SpectrumError, LookupError):
    """Raised when an attenuation coefficient cannot be resolved."""


class MaterialNotFoundError(AttenuationLookupError, KeyError):
    """Raised when a filter material is not available in the data source."""
    def __init__(self, material_id: str):
        self.material_id = material_id
        super().__init__(f"Unknown material: {material_id!r}")


class EnergyOutOfRangeError(AttenuationLookupError, ValueError):
    """Raised when a photon energy falls outside the tabulated range."""
    def __init__(self, material_id: str, energy_keV: float,
                 min_keV: float, max_keV: float):
        self.material_id = material_id
        self.energy_keV = energy_keV
        super().__init__(
            f"Energy {energy_keV:g} keV outside tabulated range "
            f"[{min_keV:g}, {max_keV:g}] keV for material {material_id!r}."
        )
