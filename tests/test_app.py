"""Tests for the command line entry point."""

import json

import pytest
from numpy.testing import assert_allclose

from biquadcalc.app import main
from biquadcalc.core.biquad import FilterType


def run_json(capsys, *args):
    """Run main with JSON output and return the parsed document."""
    assert main([*args, "--format", "json"]) == 0
    return json.loads(capsys.readouterr().out)


class TestMain:
    """Tests for main()."""

    def test_list_types(self, clean_env, capsys):
        """Test that all filter types are listed."""
        assert main(["--list-types"]) == 0

        out = capsys.readouterr().out
        assert out.split() == [t.value for t in FilterType]

    def test_lowpass_json(self, clean_env, capsys):
        """Test computing a lowpass filter."""
        data = run_json(capsys, "lowpass", "1000", "-r", "44100", "-q", "0.707")

        assert len(data) == 1
        assert data[0]["filter_type"] == "lowpass"
        assert_allclose(data[0]["coefficients"]["a0"], 0.0046039350, atol=1e-10)
        assert_allclose(data[0]["coefficients"]["b1"], -1.7990716166, atol=1e-10)

    def test_table_output(self, clean_env, capsys):
        """Test default table output."""
        assert main(["highShelf", "5000", "-g", "6"]) == 0

        out = capsys.readouterr().out
        assert out.startswith("# highShelf 5000 Hz @ 48000 Hz")
        assert "+6 dB" in out

    def test_config_defaults_used(self, clean_env, capsys):
        """Test that environment settings provide defaults."""
        clean_env.setenv("BIQUADCALC_SAMPLE_RATE", "44100")
        clean_env.setenv("BIQUADCALC_Q", "1.5")

        data = run_json(capsys, "notch", "60")

        assert data[0]["sample_rate"] == 44100.0
        assert data[0]["q"] == 1.5

    def test_cookbook_design(self, clean_env, capsys):
        """Test selecting the cookbook formulas."""
        data = run_json(capsys, "peak", "1000", "-q", "2", "-g", "6", "--design", "cookbook")
        assert_allclose(data[0]["coefficients"]["a0"], 1.0224727682, rtol=1e-9)

    def test_lr4_design(self, clean_env, capsys):
        """Test that LR4 prints two sections."""
        data = run_json(capsys, "lowpass", "1000", "--design", "lr4")

        assert [d["label"] for d in data] == ["LR4 section 1", "LR4 section 2"]
        assert data[0]["coefficients"] == data[1]["coefficients"]

    def test_response(self, clean_env, capsys):
        """Test printing the magnitude response."""
        assert main(["peak", "1000", "-q", "2", "-g", "6", "--response", "1000", "20"]) == 0

        out = capsys.readouterr().out
        assert "# magnitude response" in out
        assert "1000.00 Hz     +6.000 dB" in out

    def test_lr4_response_includes_gain(self, clean_env, capsys):
        """Test that the LR4 output gain is part of the response."""
        assert main(["lowpass", "1000", "--design", "lr4", "-g", "-6", "--response", "10"]) == 0

        out = capsys.readouterr().out
        assert "10.00 Hz     -6.000 dB" in out

    def test_output_file(self, clean_env, capsys, tmp_path):
        """Test writing to a file instead of stdout."""
        filepath = tmp_path / "coeffs.json"
        assert main(["bandpass", "440", "-f", "json", "-o", str(filepath)]) == 0

        assert capsys.readouterr().out == ""
        data = json.loads(filepath.read_text())
        assert data[0]["filter_type"] == "bandpass"

    def test_eq_design(self, clean_env, capsys):
        """Test that a parametric EQ prints one section per band."""
        data = run_json(
            capsys,
            "--design", "eq",
            "-b", "peak:1000:-3:2",
            "-b", "lowShelf:100:4",
            "-b", "highShelf:8000:2:0.707",
        )

        assert [d["filter_type"] for d in data] == ["lowShelf", "peak", "highShelf"]
        assert [d["label"] for d in data] == ["EQ band 1", "EQ band 2", "EQ band 3"]
        assert_allclose(data[0]["q"], 0.7071067811865476)
        assert data[1]["peak_gain_db"] == -3.0

    def test_eq_response_includes_output_gain(self, clean_env, capsys):
        """Test that the EQ response adds the bands and the output gain."""
        argv = ["--design", "eq", "-b", "peak:1000:6:2", "-g", "-2", "--response", "1000"]
        assert main(argv) == 0

        out = capsys.readouterr().out
        assert "1000.00 Hz     +4.000 dB" in out

    def test_degenerate_input_still_prints(self, clean_env, capsys):
        """Test that non-finite results are printed, not rejected."""
        data = run_json(capsys, "lowpass", "1000", "-q", "0")
        assert data[0]["coefficients"]["b2"] is None


class TestMainErrors:
    """Tests for argument errors."""

    def test_unknown_type(self, clean_env, capsys):
        """Test that an unknown filter type is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            main(["allpass", "1000"])

        assert exc_info.value.code == 2
        assert "Unsupported filter type" in capsys.readouterr().err

    def test_cookbook_rejects_lowpass(self, clean_env, capsys):
        """Test that cookbook design only supports peak and shelves."""
        with pytest.raises(SystemExit) as exc_info:
            main(["lowpass", "1000", "--design", "cookbook"])
        assert exc_info.value.code == 2

    def test_missing_frequency(self, clean_env, capsys):
        """Test that TYPE and FREQUENCY are required."""
        with pytest.raises(SystemExit) as exc_info:
            main(["lowpass"])

        assert exc_info.value.code == 2
        assert "TYPE and FREQUENCY are required" in capsys.readouterr().err

    def test_json_response_conflict(self, clean_env, capsys):
        """Test that --response cannot be mixed into JSON on stdout."""
        with pytest.raises(SystemExit) as exc_info:
            main(["peak", "1000", "-f", "json", "--response", "1000"])
        assert exc_info.value.code == 2

    def test_bad_environment(self, clean_env, capsys):
        """Test that invalid configuration is reported."""
        clean_env.setenv("BIQUADCALC_Q", "wide")

        assert main(["peak", "1000"]) == 2
        assert "BIQUADCALC_Q" in capsys.readouterr().err

    def test_eq_requires_bands(self, clean_env, capsys):
        """Test that --design eq needs at least one band."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--design", "eq"])

        assert exc_info.value.code == 2
        assert "requires at least one --band" in capsys.readouterr().err

    def test_band_requires_eq_design(self, clean_env, capsys):
        """Test that bands are only accepted by --design eq."""
        with pytest.raises(SystemExit) as exc_info:
            main(["peak", "1000", "-b", "peak:1000:3"])
        assert exc_info.value.code == 2

    def test_malformed_band(self, clean_env, capsys):
        """Test that a malformed band is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--design", "eq", "-b", "peak:1000"])

        assert exc_info.value.code == 2
        assert "TYPE:FREQUENCY:GAIN" in capsys.readouterr().err

    def test_unwritable_output(self, clean_env, capsys, tmp_path):
        """Test that a failed write is reported without a traceback."""
        filepath = tmp_path / "missing" / "coeffs.txt"

        assert main(["lowpass", "1000", "-o", str(filepath)]) == 1

        err = capsys.readouterr().err
        assert "cannot write" in err
        assert str(filepath) in err
