# File: spring_helper/initializer.py
"""
spring-helper - Project Skeleton Download
===========================================
Backs the ``init`` command: builds a Spring Initializr request for a
WebFlux + R2DBC + PostgreSQL project and saves the returned zip
byte-for-byte.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, FrozenSet, List, Optional

import httpx

from spring_helper.models import InitRequest
from spring_helper.utils import write_bytes_atomic

logger: logging.Logger = logging.getLogger("spring_helper.initializer")

SPRING_INITIALIZR_URL: str = "https://start.spring.io/starter.zip"
BOOT_VERSION: str = "2.7.1"
STARTER_DEPENDENCIES: str = (
    "webflux,lombok,devtools,configuration-processor,data-r2dbc,postgresql"
)

_PROJECT_TYPES: Dict[str, str] = {
    "maven": "maven-project",
    "gradle": "gradle-project",
}
_PACKAGING_TYPES: FrozenSet[str] = frozenset({"jar", "war"})
_JAVA_VERSIONS: FrozenSet[int] = frozenset({18, 17, 11})


class SkeletonDownloadError(RuntimeError):
    """The initializer could not be reached, refused the request or the zip could not be saved."""


def build_starter_params(
    request: InitRequest,
    notice: Optional[Callable[[str], None]] = None,
) -> Dict[str, str]:
    """
    Translate an ``InitRequest`` into Spring Initializr query parameters.

    Raises ``ValueError`` with the message to show the operator when an
    argument is out of range.  *notice* receives informational messages.
    """
    notice = notice or print
    parts: List[str] = request.package_name.split(".")

    if len(parts) < 3:
        raise ValueError("Package name structure is too short.")
    if len(parts) > 3:
        notice(
            "Package name structure is longer than expected, string parts "
            "after index 1 will all be defined as artifactId."
        )

    project_type: Optional[str] = _PROJECT_TYPES.get(request.project_type.lower())
    if project_type is None:
        raise ValueError("Invalid project type.")

    packaging: str = request.package_type.lower()
    if packaging not in _PACKAGING_TYPES:
        raise ValueError("Invalid package type.")

    if request.java_version not in _JAVA_VERSIONS:
        raise ValueError("Invalid Java version.")

    artifact_id: str = "-".join(parts[2:])
    return {
        "type": project_type,
        "language": "java",
        "bootVersion": BOOT_VERSION,
        "baseDir": artifact_id,
        "groupId": f"{parts[0]}.{parts[1]}",
        "artifactId": artifact_id,
        "name": artifact_id,
        "description": artifact_id,
        "packageName": request.package_name,
        "packaging": packaging,
        "javaVersion": str(request.java_version),
        "dependencies": STARTER_DEPENDENCIES,
    }


def download_skeleton(
    request: InitRequest,
    params: Dict[str, str],
    *,
    client: Optional[httpx.Client] = None,
    output_dir: Path = Path("."),
    progress: Optional[Callable[[str], None]] = None,
) -> Path:
    """
    Fetch the project zip and write it to ``output_dir / request.file_name``.

    Returns the written path.  Any HTTP or filesystem failure is raised as
    ``SkeletonDownloadError``.
    """
    progress = progress or print
    target: Path = Path(output_dir) / request.file_name

    progress("Downloading Spring project zip file from Spring Initializr.")
    progress("Please wait...\n")

    owns_client: bool = client is None
    http: httpx.Client = client or httpx.Client(follow_redirects=True, timeout=60.0)
    try:
        response: httpx.Response = http.get(SPRING_INITIALIZR_URL, params=params)
        response.raise_for_status()
        content: bytes = response.content
    except httpx.HTTPError as exc:
        raise SkeletonDownloadError(
            f"Response could not be found, reason: {exc}"
        ) from exc
    finally:
        if owns_client:
            http.close()

    logger.info("Received %d bytes from %s.", len(content), SPRING_INITIALIZR_URL)

    try:
        write_bytes_atomic(target, content)
    except OSError as exc:
        raise SkeletonDownloadError(
            f"File creation failed, reason: {exc}"
        ) from exc

    progress(f"Project downloaded successfully as {request.file_name}.")
    return target


__all__: List[str] = [
    "SPRING_INITIALIZR_URL",
    "SkeletonDownloadError",
    "build_starter_params",
    "download_skeleton",
]
