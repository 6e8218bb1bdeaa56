"""Tests for the onair command line."""

import os
import signal

import pytest

from onair import main as main_module
from onair.main import build_parser, main
from onair.tests.test_doubles import FakePlayer, station_doc


class TestParser:
    """Tests for command-line argument parsing."""

    def test_play_len_optional(self):
        args = build_parser().parse_args(["station.json"])
        assert args.config == "station.json"
        assert args.play_len is None

    def test_play_len_parsed(self):
        assert build_parser().parse_args(["station.json", "12"]).play_len == 12

    def test_skip_errors_flag_pair(self):
        assert build_parser().parse_args(["station.json", "--skip-errors"]).skip_errors is True
        assert build_parser().parse_args(["station.json", "--no-skip-errors"]).skip_errors is False

    def test_no_skip_errors_overrides_environment_default(self, monkeypatch):
        monkeypatch.setattr(main_module, "SKIP_ON_ERROR", True)
        assert build_parser().parse_args(["station.json"]).skip_errors is True
        assert build_parser().parse_args(["station.json", "--no-skip-errors"]).skip_errors is False

    @pytest.mark.parametrize("value", ["-3", "ten"])
    def test_bad_play_len(self, value):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["station.json", value])


class TestMain:
    """Tests for running a whole broadcast through main()."""

    def test_dry_run_prints_playlist(self, config_file, capsys):
        assert main([config_file(), "3", "--dry-run", "--seed", "5", "--audio-dir", "/srv/radio"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "#EXTM3U"
        # every step has at least a chatty block (3 segments) and a quiet one (2 segments)
        assert len(lines) - 1 >= 3 * 5
        assert all(line.startswith("/srv/radio/") for line in lines[1:])

    def test_seed_makes_playlist_reproducible(self, config_file, capsys):
        path = config_file()
        main([path, "4", "--dry-run", "--seed", "9"])
        first = capsys.readouterr().out
        main([path, "4", "--dry-run", "--seed", "9"])
        assert capsys.readouterr().out == first

    def test_audio_dir_from_document(self, config_file, capsys):
        main([config_file(station_doc(audio_dir="/doc/audio")), "1", "--dry-run"])
        lines = capsys.readouterr().out.splitlines()
        assert all(line.startswith("/doc/audio/") for line in lines[1:])

    def test_degenerate_catalog_exits_before_playing(self, config_file, capsys):
        assert main([config_file(station_doc(trans=["t1.mp3"])), "1", "--dry-run"]) == 1
        assert capsys.readouterr().out == ""

    def test_missing_config(self, tmp_path):
        assert main([str(tmp_path / "nope.json"), "1", "--dry-run"]) == 1

    def test_playback_error_exits_nonzero(self, config_file, monkeypatch):
        player = FakePlayer(failing={"/srv/radio/t1.mp3", "/srv/radio/t2.mp3"})
        monkeypatch.setattr(main_module, "NullPlayer", lambda: player)
        assert main([config_file(), "5", "--dry-run", "--audio-dir", "/srv/radio"]) == 1
        assert player.closed

    def test_skip_errors_keeps_playing(self, config_file, monkeypatch):
        player = FakePlayer(failing={"/srv/radio/t1.mp3", "/srv/radio/t2.mp3"})
        monkeypatch.setattr(main_module, "NullPlayer", lambda: player)
        assert main([config_file(), "5", "--dry-run", "--skip-errors", "--audio-dir", "/srv/radio"]) == 0
        assert player.closed

    @pytest.mark.parametrize("signum", [signal.SIGTERM, signal.SIGINT])
    def test_signal_ends_broadcast_cleanly(self, config_file, monkeypatch, capsys, signum):
        player = SignallingPlayer(signum, after=3)
        monkeypatch.setattr(main_module, "NullPlayer", lambda: player)
        previous = signal.getsignal(signum)
        assert main([config_file(), "50", "--dry-run", "--audio-dir", "/srv/radio"]) == 0
        assert player.closed
        assert player.stopped == 1
        assert len(player.played) == 3
        assert len(capsys.readouterr().out.splitlines()) == 1 + 3
        assert signal.getsignal(signum) is previous

    def test_no_skip_errors_overrides_environment(self, config_file, monkeypatch):
        monkeypatch.setattr(main_module, "SKIP_ON_ERROR", True)
        player = FakePlayer(failing={"/srv/radio/t1.mp3", "/srv/radio/t2.mp3"})
        monkeypatch.setattr(main_module, "NullPlayer", lambda: player)
        assert main([config_file(), "5", "--dry-run", "--no-skip-errors", "--audio-dir", "/srv/radio"]) == 1


class SignallingPlayer(FakePlayer):
    """FakePlayer that sends a signal to this process on its Nth play."""

    def __init__(self, signum, after):
        super().__init__()
        self.signum = signum
        self.after = after

    def play(self, path):
        result = super().play(path)
        if len(self.played) == self.after:
            os.kill(os.getpid(), self.signum)
        return result
