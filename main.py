"""spectragen — Entry Point.

Usage:
    python main.py 80 --filtration-mm 2.5 --material Al
    python main.py 120 --csv spectrum_120kVp.csv
"""
import argparse
import logging
import sys

from spectragen.constants import APP_NAME, DEFAULT_FILTER_MATERIAL, DEFAULT_FILTRATION_MM
from spectragen.core.exceptions import SpectrumError
from spectragen.core.spectrum_models import TasmipSpectrum
from spectragen.export.csv_export import CsvExporter
from spectragen.models.spectrum import SpectrumRequest


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Generate a TASMIP tungsten-anode x-ray spectrum.",
    )
    parser.add_argument("kvp", type=int, help="Tube potential [kVp], 1-150")
    parser.add_argument(
        "--filtration-mm", type=float, default=DEFAULT_FILTRATION_MM,
        help="Added filtration thickness [mm] (default: %(default)s)",
    )
    parser.add_argument(
        "--material", default=DEFAULT_FILTER_MATERIAL,
        help="Filter material ID (default: %(default)s)",
    )
    parser.add_argument(
        "--data-dir", default=None,
        help="NIST XCOM data directory (default: bundled tables)",
    )
    parser.add_argument("--csv", metavar="PATH", help="Write the spectrum to a CSV file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    request = SpectrumRequest(
        tube_potential=args.kvp,
        filtration_mm=args.filtration_mm,
        filter_material=args.material,
        data_source=args.data_dir,
    )
    try:
        spectrum = TasmipSpectrum().generate(request)
    except SpectrumError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.csv:
        CsvExporter().export_spectrum(spectrum, args.csv)
    else:
        print(f"# {spectrum.kVp} kVp, {spectrum.filtration_mm:g} mm {spectrum.filter_material}")
        print(f"# mean energy {spectrum.mean_energy:.2f} keV")
        for energy, value in zip(spectrum.energies_keV, spectrum.fluence):
            if value != 0.0:
                print(f"{energy:.0f}\t{value:.6e}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
