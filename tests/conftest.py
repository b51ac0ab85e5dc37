"""Shared pytest fixtures."""

import os
import tempfile

import pytest

# Keep log files out of the project tree when the app module is imported
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="filecontext-logs-"))

from filecontext.core.config import Settings  # noqa: E402
from filecontext.models.file_record import FileKind, FileRecord  # noqa: E402


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at fake endpoints and a temporary storage area."""
    return Settings(
        ollama_base_url="http://ollama.test:11434",
        ollama_model="llama2",
        together_api_key="test-key",
        together_model="mistral-7b",
        provider_timeout_seconds=5,
        max_context_length=4000,
        storage_dir=str(tmp_path / "storage"),
        log_dir=str(tmp_path / "logs"),
    )


@pytest.fixture
def make_record():
    """Factory for file records."""
    def _make(name, content=None, kind=FileKind.FILE, path=None):
        return FileRecord(
            name=name,
            path=path or f"/data/{name}",
            kind=kind,
            content=content,
        )
    return _make


@pytest.fixture
def sample_tree(tmp_path):
    """
    A small directory:

        project/
            notes.md        "hello world"
            main.py         "print('hi')"
            image.bin       text-like bytes
            docs/           (subdirectory)
                guide.txt
    """
    root = tmp_path / "project"
    root.mkdir()
    (root / "notes.md").write_text("hello world", encoding="utf-8")
    (root / "main.py").write_text("print('hi')", encoding="utf-8")
    (root / "image.bin").write_text("looks like text", encoding="utf-8")
    (root / "docs").mkdir()
    (root / "docs" / "guide.txt").write_text("nested", encoding="utf-8")
    return root
