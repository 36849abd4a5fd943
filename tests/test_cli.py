"""Tests for CLI helpers and commands."""

import asyncio
import sys

import pytest

from anagrama import cli
from anagrama.config import TimingConfig
from anagrama.engine.typography import plan_typography
from anagrama.models import Corpus


class TestScaledTiming:
    def test_speed_divides_durations(self):
        timing = cli.scaled_timing(TimingConfig(), 10)
        assert timing.move == pytest.approx(0.8)
        assert timing.total == pytest.approx(1.5)

    def test_speed_must_be_positive(self):
        with pytest.raises(ValueError):
            cli.scaled_timing(TimingConfig(), 0)


class TestCheck:
    def test_balanced_corpus(self, capsys):
        corpus = Corpus(title="t", texts=["Listen,\nthe dormitory!", "Silent:\nthe dirty room."])
        plan = plan_typography(corpus.texts, 1000, 600)
        assert cli.check(corpus, plan) is True
        out = capsys.readouterr().out
        assert "0 -> 1" in out
        assert "1 -> 0" in out

    def test_unbalanced_corpus(self, capsys):
        corpus = Corpus(title="t", texts=["ROMA", "AMOR", "MORAS"])
        plan = plan_typography(corpus.texts, 1000, 600)
        assert cli.check(corpus, plan) is False
        assert "sx1" in capsys.readouterr().out


class TestPlay:
    def test_runs_requested_cycles(self, roma_corpus, fast_config, capsys):
        completed = asyncio.run(cli.play(roma_corpus, fast_config, 1000, 600, 2))
        assert completed == 2
        out = capsys.readouterr().out
        assert "Uno -> Dos" in out
        assert "Dos -> Uno" in out
        assert "[display_final]" in out

    def test_unusable_container(self, roma_corpus, fast_config, capsys):
        assert asyncio.run(cli.play(roma_corpus, fast_config, 0, 0, 1)) == 0
        assert "not usable" in capsys.readouterr().out


class TestMain:
    @pytest.mark.parametrize("command", [["play"], ["render", "out.gif"]])
    def test_non_positive_speed_is_rejected(self, monkeypatch, capsys, command):
        monkeypatch.setattr(sys, "argv", ["anagrama", *command, "--speed", "0"])
        with pytest.raises(SystemExit) as exc:
            cli.main()
        assert exc.value.code == 2
        assert "--speed must be positive" in capsys.readouterr().err

    def test_plan_command(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["anagrama", "--texts", "listen-silent", "plan", "1000", "600"])
        cli.main()
        out = capsys.readouterr().out
        assert "font_size" in out
        assert "is_mobile: False" in out

    def test_plan_not_ready(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["anagrama", "plan", "0", "600"])
        cli.main()
        assert "Not ready" in capsys.readouterr().out

    def test_texts_command(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["anagrama", "--texts", "listen-silent", "texts"])
        cli.main()
        out = capsys.readouterr().out
        assert "sonetos-palindromicos" in out
        assert "Short anagrams (en)" in out
        assert "0. Before: Listen," in out

    def test_check_command(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["anagrama", "--texts", "listen-silent", "check"])
        cli.main()
        assert "All pairs are balanced anagrams." in capsys.readouterr().out

    def test_render_command(self, monkeypatch, capsys, tmp_path):
        out_path = tmp_path / "cycle.gif"
        monkeypatch.setattr(
            sys, "argv",
            ["anagrama", "--texts", "listen-silent", "render", str(out_path), "--speed", "20"],
        )
        cli.main()
        assert out_path.exists()
        assert "Output:" in capsys.readouterr().out

    def test_no_command_prints_help(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["anagrama"])
        cli.main()
        assert "usage" in capsys.readouterr().out.lower()
