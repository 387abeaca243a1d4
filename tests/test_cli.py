"""Tests for cli.py -- Click CLI interface."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner
from loguru import logger

from tagmv.cli import main
from tagmv.models import BatchResult


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    """Keep TAGMV_* env vars and any .env in cwd out of the tests."""
    for var in ("TAGMV_EXECUTE", "TAGMV_RECURSIVE", "TAGMV_LOG_DIR", "TAGMV_LOG_LEVEL", "TAGMV_VERBOSE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    # setup_logging binds a sink to CliRunner's temporary stderr
    logger.remove()


class TestHelpOutput:
    def test_help_flag(self):
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Artist - Album" in result.output
        assert "--execute" in result.output
        assert "--recursive" in result.output

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "tagmv" in result.output


class TestModes:
    @patch("tagmv.cli.SortRunner")
    def test_dry_run_by_default(self, mock_runner_cls, tmp_path):
        mock_runner_cls.return_value.run.return_value = BatchResult()
        result = CliRunner().invoke(main, [str(tmp_path)])
        assert result.exit_code == 0, result.output + str(result.exception or "")
        assert "DRY RUN" in result.output
        config = mock_runner_cls.call_args.kwargs.get("config")
        assert config.execute is False

    @patch("tagmv.cli.SortRunner")
    def test_execute_flag(self, mock_runner_cls, tmp_path):
        mock_runner_cls.return_value.run.return_value = BatchResult()
        result = CliRunner().invoke(main, [str(tmp_path), "--execute", "-r"])
        assert result.exit_code == 0, result.output + str(result.exception or "")
        assert "EXECUTING" in result.output
        config = mock_runner_cls.call_args.kwargs.get("config")
        assert config.execute is True
        assert config.recursive is True

    @patch("tagmv.cli.SortRunner")
    def test_defaults_to_cwd(self, mock_runner_cls, tmp_path):
        mock_runner_cls.return_value.run.return_value = BatchResult()
        result = CliRunner().invoke(main, [])
        assert result.exit_code == 0, result.output + str(result.exception or "")
        mock_runner_cls.return_value.run.assert_called_once_with(tmp_path.resolve())

    @patch("tagmv.cli.SortRunner")
    def test_env_enables_execute(self, mock_runner_cls, tmp_path, monkeypatch):
        monkeypatch.setenv("TAGMV_EXECUTE", "true")
        mock_runner_cls.return_value.run.return_value = BatchResult()
        result = CliRunner().invoke(main, [str(tmp_path)])
        assert result.exit_code == 0
        assert mock_runner_cls.call_args.kwargs["config"].execute is True

    @patch("tagmv.cli.SortRunner")
    def test_config_file(self, mock_runner_cls, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text("TAGMV_RECURSIVE=true\n")
        mock_runner_cls.return_value.run.return_value = BatchResult()
        result = CliRunner().invoke(main, [str(tmp_path), "-c", str(env_file)])
        assert result.exit_code == 0, result.output + str(result.exception or "")
        assert mock_runner_cls.call_args.kwargs["config"].recursive is True

    @patch("tagmv.cli.SortRunner")
    def test_verbose_flag(self, mock_runner_cls, tmp_path):
        mock_runner_cls.return_value.run.return_value = BatchResult()
        result = CliRunner().invoke(main, [str(tmp_path), "-v"])
        assert result.exit_code == 0, result.output + str(result.exception or "")
        assert mock_runner_cls.call_args.kwargs["config"].verbose is True

    @patch("tagmv.cli.SortRunner")
    def test_env_enables_verbose(self, mock_runner_cls, tmp_path, monkeypatch):
        monkeypatch.setenv("TAGMV_VERBOSE", "1")
        mock_runner_cls.return_value.run.return_value = BatchResult()
        result = CliRunner().invoke(main, [str(tmp_path)])
        assert result.exit_code == 0
        assert mock_runner_cls.call_args.kwargs["config"].verbose is True


class TestExitCodes:
    @patch("tagmv.cli.SortRunner")
    def test_failures_exit_nonzero(self, mock_runner_cls, tmp_path):
        mock_runner_cls.return_value.run.return_value = BatchResult(moved=2, failed=1, total=3)
        result = CliRunner().invoke(main, [str(tmp_path), "--execute"])
        assert result.exit_code == 1

    def test_missing_path(self, tmp_path):
        result = CliRunner().invoke(main, [str(tmp_path / "nope")])
        assert result.exit_code != 0

    def test_file_path_rejected(self, tmp_path):
        f = tmp_path / "song.mp3"
        f.write_bytes(b"x")
        result = CliRunner().invoke(main, [str(f)])
        assert result.exit_code != 0


class TestEndToEnd:
    @patch("tagmv.runner.read_tags")
    def test_sorts_directory(self, mock_read_tags, tmp_path):
        from tagmv.models import TrackMetadata

        music = tmp_path / "music"
        music.mkdir()
        (music / "track.mp3").write_bytes(b"audio")
        (music / "noise.wav").write_bytes(b"audio")
        mock_read_tags.side_effect = lambda path, **kw: (
            TrackMetadata("Artist", "Album", "Title", 5) if path.name == "track.mp3" else None
        )

        result = CliRunner().invoke(main, [str(music), "--execute"])

        assert result.exit_code == 0, result.output + str(result.exception or "")
        assert (music / "Artist - Album" / "05 - Title.mp3").exists()
        assert (music / "_Unsorted" / "noise.wav").exists()
        assert "Moved 2 files successfully" in result.output
