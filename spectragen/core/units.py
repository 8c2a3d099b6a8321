"""Unit conversion module — single conversion point for the spectrum core.

CRITICAL: All unit conversions MUST go through this module.

Internal (core) units:
    Length   : cm
    Energy   : keV (energy bins), MeV (attenuation queries)
    Density  : g/cm³
    μ/ρ      : cm²/g
    μ        : cm⁻¹

User units:
    Filtration: mm
"""

from typing import NewType

# Type aliases — zero runtime cost, visible in IDE for unit-error detection
Cm = NewType('Cm', float)
Mm = NewType('Mm', float)
KeV = NewType('KeV', float)
MeV = NewType('MeV', float)

KEV_PER_MEV = 1000.0
MM_PER_CM = 10.0


# ---------------------------------------------------------------------------
# Length conversions
# ---------------------------------------------------------------------------

def mm_to_cm(mm: float) -> Cm:
    """User (mm) → Core (cm)."""
    return Cm(mm / MM_PER_CM)


def cm_to_mm(cm: float) -> Mm:
    """Core (cm) → User (mm)."""
    return Mm(cm * MM_PER_CM)


# ---------------------------------------------------------------------------
# Energy conversions
# ---------------------------------------------------------------------------

def MeV_to_keV(mev: float) -> KeV:
    """MeV → keV."""
    return KeV(mev * KEV_PER_MEV)


def keV_to_MeV(kev: float) -> MeV:
    """keV → MeV."""
    return MeV(kev / KEV_PER_MEV)
