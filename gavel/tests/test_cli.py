"""
Tests for the command-line interface.
"""

import pytest

from ..cli import main


class TestCLI:
    """Tests for CLI commands."""

    def test_rivals(self, capsys):
        assert main(["rivals"]) == 0

        out = capsys.readouterr().out
        assert "sterling_vance" in out
        assert "Scrapyard Joe" in out

    def test_simulate(self, capsys):
        code = main(["simulate", "--rival", "scrapyard_joe", "--valuation", "6000", "--seed", "1"])

        out = capsys.readouterr().out
        assert code in (0, 1)
        assert "Opening bid: $3,900" in out
        assert "Opening bid → $3,900." in out

    def test_simulate_quit(self, capsys):
        assert main(["simulate", "--script", "quit"]) == 0
        assert "You quit the auction." in capsys.readouterr().out

    def test_unknown_rival(self, capsys):
        with pytest.raises(SystemExit):
            main(["simulate", "--rival", "nobody"])
        assert "Unknown rival" in capsys.readouterr().out

    def test_unknown_tactic(self, capsys):
        with pytest.raises(SystemExit):
            main(["simulate", "--script", "bid,dance"])

    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])
