"""
tests/test_initializer.py
Unit tests for spring_helper.initializer.

HTTP traffic goes through ``httpx.MockTransport``; nothing leaves the process.
"""

from __future__ import annotations

import pathlib
from typing import List

import httpx
import pytest

from spring_helper.initializer import (
    BOOT_VERSION,
    SPRING_INITIALIZR_URL,
    STARTER_DEPENDENCIES,
    SkeletonDownloadError,
    build_starter_params,
    download_skeleton,
)
from spring_helper.models import InitRequest

ZIP_BYTES: bytes = b"PK\x03\x04fake-zip-payload"


def _request(**overrides) -> InitRequest:
    data = {
        "package_name": "tw.mingchang.project",
        "package_type": "jar",
        "java_version": 17,
        "project_type": "gradle",
    }
    data.update(overrides)
    return InitRequest(**data)


class TestBuildStarterParams:
    def test_three_part_package(self) -> None:
        params = build_starter_params(_request(), notice=lambda _: None)
        assert params == {
            "type": "gradle-project",
            "language": "java",
            "bootVersion": BOOT_VERSION,
            "baseDir": "project",
            "groupId": "tw.mingchang",
            "artifactId": "project",
            "name": "project",
            "description": "project",
            "packageName": "tw.mingchang.project",
            "packaging": "jar",
            "javaVersion": "17",
            "dependencies": STARTER_DEPENDENCIES,
        }

    def test_case_insensitive_choices(self) -> None:
        params = build_starter_params(
            _request(package_type="WAR", project_type="Maven"), notice=lambda _: None
        )
        assert params["type"] == "maven-project"
        assert params["packaging"] == "war"

    def test_long_package_joins_artifact_id(self) -> None:
        notices: List[str] = []
        params = build_starter_params(
            _request(package_name="com.example.my.app"), notice=notices.append
        )
        assert params["groupId"] == "com.example"
        assert params["artifactId"] == "my-app"
        assert len(notices) == 1

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"package_name": "tw.project"}, "Package name structure is too short."),
            ({"project_type": "ant"}, "Invalid project type."),
            ({"package_type": "ear"}, "Invalid package type."),
            ({"java_version": 8}, "Invalid Java version."),
        ],
    )
    def test_invalid_arguments(self, overrides, message: str) -> None:
        with pytest.raises(ValueError, match=message):
            build_starter_params(_request(**overrides), notice=lambda _: None)


class TestDownloadSkeleton:
    def test_saves_response_body(self, tmp_path: pathlib.Path) -> None:
        seen: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=ZIP_BYTES)

        messages: List[str] = []
        request = _request(file_name="demo.zip")
        params = build_starter_params(request, notice=lambda _: None)
        with httpx.Client(transport=httpx.MockTransport(handler)) as client:
            path = download_skeleton(
                request, params, client=client, output_dir=tmp_path, progress=messages.append
            )

        assert path == tmp_path / "demo.zip"
        assert path.read_bytes() == ZIP_BYTES
        assert str(seen[0].url).startswith(SPRING_INITIALIZR_URL)
        assert seen[0].url.params["bootVersion"] == "2.7.1"
        assert messages[-1] == "Project downloaded successfully as demo.zip."

    def test_http_error_writes_nothing(self, tmp_path: pathlib.Path) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(400, text="bad"))
        request = _request()
        with httpx.Client(transport=transport) as client:
            with pytest.raises(SkeletonDownloadError):
                download_skeleton(
                    request,
                    build_starter_params(request, notice=lambda _: None),
                    client=client,
                    output_dir=tmp_path,
                    progress=lambda _: None,
                )
        assert list(tmp_path.iterdir()) == []

    def test_transport_error(self, tmp_path: pathlib.Path) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        request = _request()
        with httpx.Client(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(SkeletonDownloadError, match="unreachable"):
                download_skeleton(
                    request,
                    build_starter_params(request, notice=lambda _: None),
                    client=client,
                    output_dir=tmp_path,
                    progress=lambda _: None,
                )

    def test_unwritable_target(self, tmp_path: pathlib.Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=ZIP_BYTES))
        request = _request()
        with httpx.Client(transport=transport) as client:
            with pytest.raises(SkeletonDownloadError, match="File creation failed"):
                download_skeleton(
                    request,
                    build_starter_params(request, notice=lambda _: None),
                    client=client,
                    output_dir=blocker,
                    progress=lambda _: None,
                )
