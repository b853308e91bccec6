import os
from pathlib import Path

import pytest

from tasklist.config import ConfigLoader
from tasklist.state.workspace import Workspace
from tasklist.utils.logger import ActivityLogger


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep config lookups and relative files inside the test's tmp dir."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("APPDATA", str(tmp_path / "xdg"))
    for key in list(os.environ):
        if key.startswith("TASKLIST_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def config(tmp_path: Path) -> ConfigLoader:
    return ConfigLoader(global_dir=tmp_path / "global", project_dir=tmp_path / "project")


@pytest.fixture()
def workspace(tmp_path: Path) -> Workspace:
    return Workspace(
        tasks_file=tmp_path / "tasks.txt",
        report_file=tmp_path / "output.txt",
        logger=ActivityLogger(tmp_path / "logs"),
    )
