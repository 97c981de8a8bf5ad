from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from sponsorlink.adapters import state_directory


@pytest.fixture
def project_file(tmp_path: Path) -> Path:
    """A project file path inside its own directory; the file itself is never read."""

    project_dir = tmp_path / "App"
    project_dir.mkdir()
    path = project_dir / "App.csproj"
    path.write_text("<Project />", encoding="utf-8")
    return path


@pytest.fixture
def write_override(project_file: Path) -> Callable[..., Path]:
    """Write an override file into the project's state directory."""

    def write(
        name: str,
        body: str,
        *,
        sponsorable: str = "devlooped",
        product: str = "ThisAssembly",
        project: Path | None = None,
    ) -> Path:
        directory = state_directory(project or project_file, sponsorable, product)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text(body, encoding="utf-8")
        return path

    return write
