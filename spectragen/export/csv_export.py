"""CSV export — generated spectra.

BOM UTF-8 encoding for Excel compatibility.
"""

from __future__ import annotations

import csv
import logging

from spectragen.models.spectrum import Spectrum

logger = logging.getLogger(__name__)


class CsvExporter:
    """CSV file export operations."""

    def export_spectrum(self, spectrum: Spectrum, output_path: str) -> None:
        """Export a spectrum as CSV.

        The first row carries the tube settings, the second the column
        names (Energy (keV), Relative Fluence), then one row per bin.

        Args:
            spectrum: Generated spectrum.
            output_path: Destination file path (.csv).
        """
        with open(output_path, "w", newline="", encoding="utf-8-sig") as f:
            writer = csv.writer(f)
            writer.writerow([
                "kVp", spectrum.kVp,
                "Filtration (mm)", f"{spectrum.filtration_mm:g}",
                "Material", spectrum.filter_material,
            ])
            writer.writerow(["Energy (keV)", "Relative Fluence"])
            for energy, value in zip(spectrum.energies_keV, spectrum.fluence):
                writer.writerow([f"{float(energy):.0f}", f"{float(value):.8e}"])
        logger.info("Spectrum exported to %s", output_path)
