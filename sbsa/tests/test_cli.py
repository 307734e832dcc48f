# sbsa/tests/test_cli.py
"""CLI: textual results with exit code 0, domain errors with exit code 2."""

import json

from sbsa.cli import main
from sbsa.field.sampler import sample
from sbsa.field.waves import WaveParams


def test_encode_decode(capsys):
    assert main(["encode", "1", "2", "3", "4", "--bounds", "4", "5", "6", "7"]) == 0
    assert capsys.readouterr().out.strip() == "549"

    assert main(["decode", "549", "--bounds", "4", "5", "6", "7"]) == 0
    assert capsys.readouterr().out.strip() == "1 2 3 4"


def test_default_bounds(capsys):
    assert main(["encode", "9999", "9999", "9999", "9999"]) == 0
    assert capsys.readouterr().out.strip() == str(10**16 - 1)


def test_encode_out_of_bounds_exits_nonzero(capsys):
    assert main(["encode", "4", "0", "0", "0", "--bounds", "4", "5", "6", "7"]) == 2
    err = capsys.readouterr().err
    assert err.startswith("error:")
    assert "out of bounds" in err and "4" in err


def test_decode_invalid_address(capsys):
    assert main(["decode", "840", "--bounds", "4", "5", "6", "7"]) == 2
    assert "out of range" in capsys.readouterr().err


def test_quantize(capsys):
    assert main(["quantize", "0.6", "1.1", "2.8", "4.1", "--step", "0.5", "0.5", "1", "1",
                 "--bounds", "4", "5", "6", "7"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["coords: 1 2 3 4", "address: 549"]

    assert main(["quantize", "1.0", "--step", "0"]) == 2


def test_sample_single_and_range(capsys):
    assert main(["sample", "549", "--time", "0.25", "--bounds", "4", "5", "6", "7"]) == 0
    addr, value = capsys.readouterr().out.split()
    assert addr == "549"
    assert float(value) == sample(549, (4, 5, 6, 7), 0.25, WaveParams())

    assert main(["sample", "--range", "0", "6", "--time", "0.1", "--bounds", "2", "3"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert [int(line.split()[0]) for line in lines] == list(range(6))

    assert main(["sample", "--time", "0.1", "--bounds", "2", "3"]) == 2


def test_sample_with_config(tmp_path, capsys):
    path = tmp_path / "field.json"
    path.write_text(json.dumps({"bounds": [2, 2], "wave_params": [{"frequency": -1.0}]}))
    assert main(["sample", "0", "--time", "0", "--config", str(path)]) == 2
    assert "frequency" in capsys.readouterr().err

    assert main(["sample", "0", "--time", "0", "--config", str(tmp_path / "missing.json")]) == 1


def test_run(tmp_path, capsys):
    path = tmp_path / "field.json"
    path.write_text(json.dumps({"bounds": [3, 3, 3], "wave_params": [{"frequency": 0.5}]}))
    rc = main(["run", "--config", str(path), "--label", "demo", "--steps", "2",
               "--dt", "0.1", "--store", str(tmp_path / "store")])
    assert rc == 0
    assert "Wrote 3 frame(s)" in capsys.readouterr().out
    assert (tmp_path / "store" / "demo" / "Frame_0002" / "values.npy").exists()


def test_sample_with_string_frequency_exits_2(tmp_path, capsys):
    path = tmp_path / "field.json"
    path.write_text(json.dumps({"bounds": [2, 2], "wave_params": [{"frequency": "1"}]}))
    assert main(["sample", "0", "--time", "0", "--config", str(path)]) == 2
    assert "frequency must be a finite number" in capsys.readouterr().err
