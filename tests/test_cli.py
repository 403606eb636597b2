"""Tests for the command-line quiz option handling."""
from __future__ import annotations

from unittest.mock import patch

import pytest

from study_quiz.__main__ import _positional, _quiz
from study_quiz.config import Settings


class TestQuizOptions:
    def test_positional_skips_flag_values(self):
        assert _positional(["next", "--seed", "7", "nest", "--types", "choice"]) == ["next", "nest"]

    @pytest.mark.parametrize("flags", [["--seed", "abc"], ["--count", "abc"], ["--mode", "random"]])
    def test_invalid_option_exits_cleanly(self, tmp_path, capsys, flags):
        with patch("study_quiz.config.load_settings", return_value=Settings(guides_dir=str(tmp_path))):
            with pytest.raises(SystemExit) as exc:
                _quiz(["next", *flags])

        assert exc.value.code == 1
        assert "Invalid options" in capsys.readouterr().out

    def test_no_questions_exits(self, tmp_path, capsys):
        with patch("study_quiz.config.load_settings", return_value=Settings(guides_dir=str(tmp_path))):
            with pytest.raises(SystemExit):
                _quiz(["git", "--seed", "3"])

        assert "No questions available" in capsys.readouterr().out
