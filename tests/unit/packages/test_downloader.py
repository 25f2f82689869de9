"""Unit tests for the package downloader."""

import io
import tarfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

from ffmpeg_builder.packages.downloader import (
    DownloadError,
    ExtractionError,
    PackageDownloader,
)


def make_response(payload: bytes) -> MagicMock:
    response = MagicMock()
    response.headers = {"content-length": str(len(payload))}
    response.iter_content.return_value = [payload[:5], b"", payload[5:]]
    response.raise_for_status.return_value = None
    return response


def make_tarball(path: Path, top_dir: str) -> Path:
    with tarfile.open(path, "w:bz2") as tar:
        data = b"#!/bin/sh\necho configure\n"
        info = tarfile.TarInfo(f"{top_dir}/configure")
        info.size = len(data)
        tar.addfile(info, io.BytesIO(data))
    return path


class TestDownload:
    """Test cases for PackageDownloader.download."""

    def test_download_writes_file(self, tmp_path):
        """Test a streamed download lands at the destination."""
        payload = b"ffmpeg archive bytes"
        dest = tmp_path / "source" / "ffmpeg-7.1.tar.bz2"

        with patch(
            "ffmpeg_builder.packages.downloader.requests.get",
            return_value=make_response(payload),
        ) as mock_get:
            result = PackageDownloader().download(
                "https://ffmpeg.org/releases/ffmpeg-7.1.tar.bz2", dest, show_progress=False
            )

        assert result == dest
        assert dest.read_bytes() == payload
        assert not dest.with_suffix(".bz2.tmp").exists()
        mock_get.assert_called_once_with(
            "https://ffmpeg.org/releases/ffmpeg-7.1.tar.bz2", stream=True, timeout=30
        )

    def test_download_http_error(self, tmp_path):
        """Test HTTP failures raise DownloadError and leave no temp file."""
        response = make_response(b"")
        response.raise_for_status.side_effect = requests.HTTPError("404 Not Found")
        dest = tmp_path / "ffmpeg-0.0.tar.bz2"

        with patch(
            "ffmpeg_builder.packages.downloader.requests.get", return_value=response
        ):
            with pytest.raises(DownloadError, match="404"):
                PackageDownloader().download("https://example.com/x", dest)

        assert list(tmp_path.iterdir()) == []

    def test_download_connection_error(self, tmp_path):
        """Test connection failures raise DownloadError."""
        with patch(
            "ffmpeg_builder.packages.downloader.requests.get",
            side_effect=requests.ConnectionError("unreachable"),
        ):
            with pytest.raises(DownloadError, match="unreachable"):
                PackageDownloader().download(
                    "https://example.com/x.tar.bz2", tmp_path / "x.tar.bz2"
                )


class TestExtractArchive:
    """Test cases for PackageDownloader.extract_archive."""

    def test_extract_tar_bz2(self, tmp_path):
        """Test a bzip2 tarball unpacks its top-level directory."""
        archive = make_tarball(tmp_path / "ffmpeg-7.1.tar.bz2", "ffmpeg-7.1")
        dest = tmp_path / "source"

        result = PackageDownloader().extract_archive(archive, dest)

        assert result == dest
        assert (dest / "ffmpeg-7.1" / "configure").read_text().startswith("#!/bin/sh")

    def test_missing_archive(self, tmp_path):
        """Test extraction of a missing archive fails."""
        with pytest.raises(ExtractionError, match="not found"):
            PackageDownloader().extract_archive(tmp_path / "nope.tar.bz2", tmp_path)

    @pytest.mark.parametrize("name", ["ffmpeg.rar", "ffmpeg-7.1.zip"])
    def test_unsupported_format(self, tmp_path, name):
        """Test archives other than tarballs are rejected."""
        archive = tmp_path / name
        archive.touch()
        with pytest.raises(ExtractionError, match="Unsupported"):
            PackageDownloader().extract_archive(archive, tmp_path / "out")

    def test_corrupt_tarball(self, tmp_path):
        """Test a corrupt archive raises ExtractionError."""
        archive = tmp_path / "ffmpeg-7.1.tar.bz2"
        archive.write_bytes(b"this is not bzip2 data")
        with pytest.raises(ExtractionError, match="Failed to extract"):
            PackageDownloader().extract_archive(archive, tmp_path / "out")
