"""Unit tests for the ffbuild command line."""

from pathlib import Path
from unittest.mock import patch

import pytest

from ffmpeg_builder.build import PipelineResult, PipelineState, StageError
from ffmpeg_builder.cli import BuildArgs, build_command, main


def make_result(state: PipelineState, out_dir: Path) -> PipelineResult:
    return PipelineResult(
        state=state,
        pkg_config_path=out_dir / "ffmpeg" / "install" / "lib" / "pkgconfig",
        build_time=1.5,
        message="ok",
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("AI_FFMPEG_BUILD_COMPONENTS", "AI_FFMPEG_PKG_VERSION", "OUT_DIR"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("platform.system", lambda: "Linux")


class TestBuildCommand:
    """Test cases for build_command."""

    def test_success_prints_pkg_config_line(self, tmp_path, capsys):
        """Test stdout carries only the key/value line."""
        with patch("ffmpeg_builder.cli.BuildPipeline") as mock_pipeline:
            mock_pipeline.return_value.run.return_value = make_result(
                PipelineState.DONE, tmp_path
            )
            with pytest.raises(SystemExit) as exc_info:
                build_command(BuildArgs(out_dir=tmp_path))

        assert exc_info.value.code == 0
        out = capsys.readouterr().out
        expected = tmp_path / "ffmpeg" / "install" / "lib" / "pkgconfig"
        assert out == f"FFMPEG_PKG_CONFIG_PATH={expected}\n"

    def test_already_built_exits_zero(self, tmp_path, capsys):
        """Test the already-built short circuit still reports the path."""
        with patch("ffmpeg_builder.cli.BuildPipeline") as mock_pipeline:
            mock_pipeline.return_value.run.return_value = make_result(
                PipelineState.ALREADY_DONE, tmp_path
            )
            with pytest.raises(SystemExit) as exc_info:
                build_command(BuildArgs(out_dir=tmp_path))

        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("FFMPEG_PKG_CONFIG_PATH=")

    def test_unknown_component_exits_nonzero(self, tmp_path, capsys):
        """Test a config error exits 1 without running the pipeline."""
        with patch("ffmpeg_builder.cli.BuildPipeline") as mock_pipeline:
            with pytest.raises(SystemExit) as exc_info:
                build_command(BuildArgs(out_dir=tmp_path, components="x264,x265"))

        assert exc_info.value.code == 1
        mock_pipeline.assert_not_called()
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "x265" in captured.err
        assert not (tmp_path / "ffmpeg").exists()

    def test_unsupported_host_exits_before_building(self, tmp_path, capsys):
        """Test an unknown host fails before any stage runs or the root exists."""
        with patch("ffmpeg_builder.cli.BuildPipeline") as mock_pipeline:
            with patch("platform.system", return_value="FreeBSD"):
                with pytest.raises(SystemExit) as exc_info:
                    build_command(BuildArgs(out_dir=tmp_path))

        assert exc_info.value.code == 1
        mock_pipeline.assert_not_called()
        assert "Unsupported platform" in capsys.readouterr().err
        assert not (tmp_path / "ffmpeg").exists()

    def test_missing_version_marker_exits_nonzero(self, tmp_path, capsys):
        """Test a package version without the marker exits 1."""
        with pytest.raises(SystemExit) as exc_info:
            build_command(BuildArgs(out_dir=tmp_path, package_version="1.2.3"))

        assert exc_info.value.code == 1
        assert "missing ffmpeg version" in capsys.readouterr().err

    def test_stage_error_exits_nonzero(self, tmp_path, capsys):
        """Test a stage failure is reported with its stage name."""
        with patch("ffmpeg_builder.cli.BuildPipeline") as mock_pipeline:
            mock_pipeline.return_value.run.side_effect = StageError(
                "x264", "configure", "./configure exited with code 1", 1
            )
            with pytest.raises(SystemExit) as exc_info:
                build_command(BuildArgs(out_dir=tmp_path))

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "x264 configure" in captured.err

    def test_keyboard_interrupt_exits_130(self, tmp_path):
        """Test an interrupted build uses the SIGINT exit code."""
        with patch("ffmpeg_builder.cli.BuildPipeline") as mock_pipeline:
            mock_pipeline.return_value.run.side_effect = KeyboardInterrupt
            with pytest.raises(SystemExit) as exc_info:
                build_command(BuildArgs(out_dir=tmp_path))

        assert exc_info.value.code == 130


class TestMain:
    """Test cases for argument parsing."""

    def test_build_arguments(self, tmp_path):
        """Test build options are forwarded."""
        with patch("ffmpeg_builder.cli.build_command") as mock_build:
            main(
                [
                    "build",
                    "--out-dir",
                    str(tmp_path),
                    "--components",
                    "x264",
                    "--package-version",
                    "1.0ffmpeg6.1",
                    "-j",
                    "4",
                    "--hwaccel",
                    "h264_vaapi",
                    "--clean",
                    "-v",
                ]
            )

        mock_build.assert_called_once_with(
            BuildArgs(
                out_dir=tmp_path,
                components="x264",
                package_version="1.0ffmpeg6.1",
                jobs=4,
                hwaccel="h264_vaapi",
                clean=True,
                verbose=True,
            )
        )

    def test_build_defaults(self):
        """Test build defaults leave resolution to the environment."""
        with patch("ffmpeg_builder.cli.build_command") as mock_build:
            main(["build"])

        mock_build.assert_called_once_with(BuildArgs())

    def test_components_listing(self, capsys):
        """Test the components command lists the registry."""
        with pytest.raises(SystemExit) as exc_info:
            main(["components"])

        assert exc_info.value.code == 0
        assert capsys.readouterr().out == "x264 (default)\n"

    def test_no_command_prints_help(self, capsys):
        """Test running without a command shows help."""
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 0
        assert "usage: ffbuild" in capsys.readouterr().out
