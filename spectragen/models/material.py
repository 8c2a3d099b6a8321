"""Material data models.

Defines filter material properties and tabulated attenuation data.
"""

from dataclasses import dataclass, field


@dataclass
class AttenuationDataPoint:
    """Single energy point in attenuation data.

    Attributes:
        energy_keV: Photon energy [keV].
        mass_attenuation: Total μ/ρ (coherent included) [cm²/g].
    """
    energy_keV: float
    mass_attenuation: float


@dataclass
class Material:
    """Filter material definition with physical properties.

    Attributes:
        id: Unique identifier ("Al", "Cu", "Be").
        name: Display name.
        symbol: Chemical symbol.
        atomic_number: Atomic number.
        density: Density [g/cm³].
        attenuation_data: Energy-dependent attenuation data, sorted by energy.
    """
    id: str
    name: str
    symbol: str
    atomic_number: float
    density: float
    attenuation_data: list[AttenuationDataPoint] = field(default_factory=list)
