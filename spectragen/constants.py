"""Application-wide constants."""

import pathlib

APP_NAME = "spectragen"
APP_VERSION = "0.1.0"

# Energy grid: one bin per keV, 0..150 keV inclusive
NUM_ENERGY_BINS = 151

# Tube potential domain [kVp]
MIN_TUBE_POTENTIAL_KVP = 1
MAX_TUBE_POTENTIAL_KVP = 150

# Filtration defaults
DEFAULT_FILTER_MATERIAL = "Al"
DEFAULT_FILTRATION_MM = 0.0

# Bundled NIST XCOM tables
DEFAULT_DATA_DIR = pathlib.Path(__file__).resolve().parent / "data" / "nist_xcom"
