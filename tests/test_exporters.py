"""
tests/test_exporters.py
Unit tests for spring_helper.exporters.ArtifactWriter.
"""

from __future__ import annotations

import pathlib

import pytest

from spring_helper.exporters import ArtifactWriteError, ArtifactWriter
from spring_helper.models import GeneratedFile


@pytest.fixture()
def generated() -> GeneratedFile:
    return GeneratedFile(
        relative_directory="service/impl",
        file_name="UserAccountServiceImpl.java",
        content="class X {}\n",
    )


class TestArtifactWriter:
    def test_writes_under_output_dir(self, tmp_path: pathlib.Path, generated: GeneratedFile) -> None:
        record = ArtifactWriter(tmp_path).write(generated)
        target = tmp_path / "service" / "impl" / "UserAccountServiceImpl.java"
        assert target.read_text(encoding="utf-8") == "class X {}\n"
        assert record.relative_path == "service/impl/UserAccountServiceImpl.java"
        assert record.absolute_path == str(target.resolve())
        assert record.size_bytes == len("class X {}\n")
        assert record.line_count == 1
        assert len(record.sha256) == 64

    def test_overwrites_without_asking(self, tmp_path: pathlib.Path, generated: GeneratedFile) -> None:
        target = tmp_path / "service" / "impl" / "UserAccountServiceImpl.java"
        target.parent.mkdir(parents=True)
        target.write_text("hand edited", encoding="utf-8")

        ArtifactWriter(tmp_path).write(generated)
        assert target.read_text(encoding="utf-8") == "class X {}\n"

    def test_failure_raises_artifact_write_error(
        self, tmp_path: pathlib.Path, generated: GeneratedFile
    ) -> None:
        (tmp_path / "service").write_text("not a directory", encoding="utf-8")
        with pytest.raises(ArtifactWriteError) as exc_info:
            ArtifactWriter(tmp_path).write(generated)
        assert exc_info.value.relative_path == "service/impl/UserAccountServiceImpl.java"
        assert isinstance(exc_info.value.cause, OSError)
