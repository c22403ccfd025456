"""Tests for the reeltc command line."""

import logging

import pytest

from reeltc.cli import main


class TestInfo:
    def test_broadcast_offset(self, capsys):
        main(["info", "01:00:01:00", "-r", "30", "--broadcast"])
        out = capsys.readouterr().out
        assert "Timecode:     01:00:01:00" in out
        assert "Frame count:  30" in out
        assert "Seconds:      1\n" in out
        assert "Milliseconds: 1000\n" in out

    def test_explicit_start_offset(self, capsys):
        main(["info", "01:00:10:00", "-r", "25", "--start-offset", "01:00:00:00"])
        assert "Frame count:  250" in capsys.readouterr().out

    def test_no_offset(self, capsys):
        main(["info", "00:00:02:15", "-r", "30"])
        out = capsys.readouterr().out
        assert "Frame count:  75" in out
        assert "Seconds:      2.5" in out


class TestArithmetic:
    def test_add_frames(self, capsys):
        main(["add", "00:59:59:29", "1", "-r", "30"])
        assert capsys.readouterr().out.strip() == "01:00:00:00"

    def test_subtract_timecode(self, capsys):
        main(["subtract", "00:00:10:00", "00:00:02:15", "-r", "25"])
        assert capsys.readouterr().out.strip() == "00:00:07:10"

    def test_subtract_clamps_with_warning(self, capsys, caplog):
        with caplog.at_level(logging.WARNING, logger="reeltc.cli"):
            main(["subtract", "00:00:01:00", "60", "-r", "30"])
        assert capsys.readouterr().out.strip() == "00:00:00:00"
        assert "clamped" in caplog.text

    def test_invalid_duration(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["add", "00:00:01:00", "abc"])
        assert exc.value.code == 1
        assert "Error: Invalid frame count or timecode: abc" in capsys.readouterr().err


class TestFrames:
    def test_frame_count_to_timecode(self, capsys):
        main(["frames", "1800", "-r", "30"])
        assert capsys.readouterr().out.strip() == "00:01:00:00"

    def test_verbose(self, capsys):
        main(["frames", "45", "-r", "30", "-v"])
        assert capsys.readouterr().out.strip() == "00:00:01:15"


class TestErrors:
    def test_malformed_timecode(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["info", "01:02:03"])
        assert exc.value.code == 1
        assert "not a valid SMPTE timecode" in capsys.readouterr().err

    @pytest.mark.parametrize("argv", [
        ["info", "00:00:01:00", "-r", "0"],
        ["frames", "5", "-r", "-25"],
        ["frames", "inf"],
        ["add", "00:00:01:00", "nan"],
    ])
    def test_bad_numbers_exit_cleanly(self, argv, capsys):
        with pytest.raises(SystemExit) as exc:
            main(argv)
        assert exc.value.code == 1
        assert capsys.readouterr().err.startswith("Error: ")

    def test_malformed_start_offset(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["info", "01:02:03:04", "--start-offset", "bad"])
        assert exc.value.code == 1

    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 0
        assert "usage: reeltc" in capsys.readouterr().out
