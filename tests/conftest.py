"""Pytest configuration and fixtures for complink tests."""

import json
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator

import pytest

from complink_cli.document import DesignDocument, DocumentNode


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def temp_config_file(temp_dir: Path, monkeypatch) -> Path:
    """Point the config file at temporary storage."""
    config_file = temp_dir / "config.toml"
    monkeypatch.setattr("complink_cli.config.CONFIG_FILE", config_file)
    return config_file


@pytest.fixture
def sample_file_path() -> Path:
    """Get path to the sample design file."""
    return Path(__file__).parent / "fixtures" / "sample_file.json"


@pytest.fixture
def sample_payload(sample_file_path: Path) -> Dict[str, Any]:
    return json.loads(sample_file_path.read_text(encoding="utf-8"))


@pytest.fixture
def sample_document(sample_payload: Dict[str, Any]) -> DesignDocument:
    return DesignDocument.from_dict(sample_payload)


@pytest.fixture
def btn_icon_frame() -> DocumentNode:
    """Frame R > INSTANCE Btn > INSTANCE Icon."""
    return DocumentNode.from_dict({
        "id": "r",
        "name": "R",
        "type": "FRAME",
        "children": [
            {
                "id": "btn",
                "name": "Btn",
                "type": "INSTANCE",
                "children": [
                    {"id": "icon", "name": "Icon", "type": "INSTANCE", "children": []},
                ],
            },
        ],
    })
