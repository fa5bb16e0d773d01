#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pytest configuration and shared fixtures for all tests
"""

import pytest
import sys
import os
import tempfile
import shutil
import base64
from pathlib import Path

# Add src directory to path so we can import our modules
src_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")
sys.path.insert(0, src_dir)

from ebook_generator.epub_document import EbookDocument

# 1x1 transparent PNG
PNG_BASE64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
PNG_DATA_URI = f"data:image/png;base64,{PNG_BASE64}"
PNG_BYTES = base64.b64decode(PNG_BASE64)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def metadata():
    """Minimal valid book metadata"""
    return {
        "id": "urn:uuid:1234",
        "title": "Example Book",
        "author": "Jane Writer",
        "cover": {"name": "cover.png", "data": PNG_DATA_URI},
    }


@pytest.fixture
def full_metadata(metadata):
    """Metadata with every optional field set"""
    return {
        **metadata,
        "series": "The Saga",
        "sequence": "2",
        "genre": "Fantasy",
        "tags": "magic, dragons",
        "copyright": "Jane Writer",
        "publisher": "Small Press",
        "published": "2021-05-04",
        "description": "A tale of <dragons> & magic",
        "source": "https://example.com/book",
        "file_as": "Writer, Jane",
    }


@pytest.fixture
def document(metadata):
    """Document with a preface and two chapters"""
    doc = EbookDocument(metadata)
    doc.add_section("Preface", "<p>Before</p>", is_front_matter=True)
    doc.add_section("Chapter One", "<p>One</p>")
    doc.add_section("Chapter Two", "<p>Two</p>")
    return doc
