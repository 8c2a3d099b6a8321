"""Command-line entry point tests."""

import csv

import pytest

from main import build_parser, main


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["80"])
        assert args.kvp == 80
        assert args.filtration_mm == 0.0
        assert args.material == "Al"
        assert args.data_dir is None
        assert args.csv is None

    def test_non_integer_kvp_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["eighty"])


class TestMain:
    def test_prints_nonzero_bins(self, capsys):
        assert main(["40", "--filtration-mm", "1.0"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "# 40 kVp, 1 mm Al"
        assert out[1].startswith("# mean energy")
        energies = [int(line.split("\t")[0]) for line in out[2:]]
        assert energies == list(range(10, 40))

    def test_writes_csv(self, tmp_path):
        path = tmp_path / "out.csv"
        assert main(["80", "--csv", str(path)]) == 0
        with open(path, encoding="utf-8-sig") as f:
            rows = list(csv.reader(f))
        assert len(rows) == 153

    def test_out_of_range_kvp(self, capsys):
        assert main(["200"]) == 2
        assert "outside supported range" in capsys.readouterr().err

    def test_unnormalizable(self, capsys):
        assert main(["10"]) == 2
        assert "Unnormalizable" in capsys.readouterr().err

    def test_unknown_material(self, capsys):
        assert main(["80", "--material", "Unobtanium"]) == 2
        assert "Unknown material" in capsys.readouterr().err
