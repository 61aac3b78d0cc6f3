"""
Shared test fixtures for the DocStore test suite.
"""

import pytest

from docstore.config import reset_config
from docstore.models.registry import DocumentRegistry


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Each test starts from default configuration with no DOCSTORE_* variables."""
    import os

    for key in list(os.environ):
        if key.startswith("DOCSTORE_"):
            monkeypatch.delenv(key)
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def reset_document_registry():
    """Restore DocumentRegistry after each test to avoid cross-contamination."""
    old_documents = DocumentRegistry._documents.copy()
    old_module_documents = DocumentRegistry._module_documents.copy()
    yield
    DocumentRegistry._documents = old_documents
    DocumentRegistry._module_documents = old_module_documents
