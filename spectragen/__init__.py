"""spectragen — TASMIP tungsten-anode x-ray spectra with added filtration."""

from spectragen.constants import APP_VERSION as __version__
from spectragen.core.exceptions import (
    AttenuationLookupError,
    EnergyOutOfRangeError,
    InputValidationError,
    MaterialNotFoundError,
    SpectrumError,
    UnnormalizableSpectrumError,
)
from spectragen.core.material_database import MaterialService, NistAttenuation
from spectragen.core.spectrum_models import TasmipSpectrum, tasmip_spectrum
from spectragen.models.spectrum import Spectrum, SpectrumRequest

__all__ = [
    "AttenuationLookupError",
    "EnergyOutOfRangeError",
    "InputValidationError",
    "MaterialNotFoundError",
    "MaterialService",
    "NistAttenuation",
    "Spectrum",
    "SpectrumError",
    "SpectrumRequest",
    "TasmipSpectrum",
    "UnnormalizableSpectrumError",
    "tasmip_spectrum",
]
