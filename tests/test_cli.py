"""Tests for the command-line interface."""

import json

import numpy as np
import pytest
import soundfile as sf
from typer.testing import CliRunner

from notestream.cli import StageTimings, app

SR = 44100
runner = CliRunner()


@pytest.fixture
def tone_file(tmp_path):
    """One second of A4 written as a WAV file."""
    t = np.arange(SR) / SR
    audio = (0.8 * np.sin(2 * np.pi * 440.0 * t)).astype(np.float32)
    path = tmp_path / "a4.wav"
    sf.write(str(path), audio, SR)
    return path


class TestNoteCommand:
    """Tests for `note`."""

    def test_single_frequency(self):
        result = runner.invoke(app, ["note", "440"])
        assert result.exit_code == 0
        assert "A4" in result.output
        assert "69" in result.output

    def test_several_frequencies(self):
        result = runner.invoke(app, ["note", "261.63", "493.88"])
        assert result.exit_code == 0
        assert "C4" in result.output
        assert "B4" in result.output

    def test_invalid_frequency(self):
        result = runner.invoke(app, ["note", "0"])
        assert result.exit_code == 1

    def test_reference_pitch(self):
        # 415 Hz is G#4 at concert pitch and A4 at baroque pitch
        assert "G#4" in runner.invoke(app, ["note", "415"]).output

        result = runner.invoke(app, ["note", "--reference", "415", "415"])
        assert result.exit_code == 0
        assert "A4" in result.output
        assert "+0" in result.output

    def test_invalid_reference(self):
        result = runner.invoke(app, ["note", "-r", "0", "440"])
        assert result.exit_code == 1


class TestDetectCommand:
    """Tests for `detect`."""

    def test_table_output(self, tone_file):
        result = runner.invoke(app, ["detect", str(tone_file), "--no-highpass"])
        assert result.exit_code == 0, result.output
        assert "A4" in result.output
        assert "Detection complete" in result.output

    def test_json_output(self, tone_file):
        result = runner.invoke(
            app, ["detect", str(tone_file), "--json", "--no-highpass", "--hop", "1000"]
        )
        assert result.exit_code == 0, result.output

        data = json.loads(result.output)
        assert data["sample_rate"] == SR
        assert [e["note"] for e in data["events"]] == ["A4"] * 5
        assert data["stats"]["emitted"] == 5
        assert data["stats"]["windows"] == 43
        assert data["timings"]["windows"] == 43
        assert data["timings"]["ms_per_window"] >= 0.0
        assert set(data["timings"]["stages"]) == {"load", "detect"}

    def test_exports(self, tone_file, tmp_path):
        midi_path = tmp_path / "a4.mid"
        json_path = tmp_path / "a4.json"
        result = runner.invoke(
            app,
            ["detect", str(tone_file), "-o", str(midi_path), "--json-out", str(json_path)],
        )
        assert result.exit_code == 0, result.output
        assert midi_path.exists()
        events = json.loads(json_path.read_text())["events"]
        assert events and all(e["note"] == "A4" for e in events)

    def test_out_of_range_setting(self, tone_file):
        result = runner.invoke(
            app, ["detect", str(tone_file), "--json", "--min-note", "70"]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["events"] == []

    def test_config_file(self, tone_file, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"max_note": 60}))
        result = runner.invoke(
            app, ["detect", str(tone_file), "--json", "-c", str(config_path)]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["events"] == []

    def test_invalid_config(self, tone_file):
        result = runner.invoke(
            app, ["detect", str(tone_file), "--min-note", "90", "--max-note", "80"]
        )
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["detect", str(tmp_path / "missing.wav")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_verbose(self, tone_file):
        result = runner.invoke(app, ["detect", str(tone_file), "-v"])
        assert result.exit_code == 0, result.output
        assert "Stream Summary" in result.output
        assert "Timing Summary" in result.output
        assert "Per window" in result.output
        assert "frame budget 16.7 ms" in result.output


class TestInfoCommand:
    """Tests for `info`."""

    def test_info(self, tone_file):
        result = runner.invoke(app, ["info", str(tone_file)])
        assert result.exit_code == 0, result.output
        assert "Sample rate: 44100 Hz" in result.output
        assert "44,100" in result.output

    def test_default_windowing(self, tone_file):
        result = runner.invoke(app, ["info", str(tone_file)])
        assert "(2048 samples, hop 735)" in result.output

    def test_custom_windowing(self, tone_file):
        result = runner.invoke(
            app, ["info", str(tone_file), "--window-size", "1024", "--frame-rate", "30"]
        )
        assert result.exit_code == 0, result.output
        assert "(1024 samples, hop 1470)" in result.output

    def test_invalid_frame_rate(self, tone_file):
        result = runner.invoke(app, ["info", str(tone_file), "--frame-rate", "0"])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestStageTimings:
    """Tests for stage timing and window throughput."""

    def test_stage_records_duration(self):
        timings = StageTimings()
        with timings.stage("detect"):
            pass
        assert set(timings.stages) == {"detect"}
        assert timings.total_time >= 0.0

    def test_stage_recorded_when_block_raises(self):
        timings = StageTimings()
        with pytest.raises(ValueError):
            with timings.stage("load"):
                raise ValueError("bad file")
        assert "load" in timings.stages

    def test_per_window_figures(self):
        timings = StageTimings(stages={"load": 0.5, "detect": 0.2}, windows=400, audio_seconds=4.0)
        assert timings.ms_per_window == pytest.approx(0.5)
        assert timings.realtime_factor == pytest.approx(20.0)
        assert timings.to_dict()["total_time"] == pytest.approx(0.7)

    def test_no_windows(self):
        timings = StageTimings()
        assert timings.ms_per_window == 0.0
        assert timings.realtime_factor == 0.0
