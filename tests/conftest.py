"""Pytest configuration and shared fixtures."""

import pytest

from fake_filesystem import VirtualFileSystem


@pytest.fixture
def vfs():
    """A fresh filesystem standing at the root."""
    return VirtualFileSystem()


@pytest.fixture
def small_tree():
    """A tiny tree with an empty directory and an empty file."""
    return {
        "a": {
            "b": {
                "deep.txt": "deep",
            },
            "empty": {},
        },
        "blank.txt": "",
        "note.txt": "héllo",
    }


@pytest.fixture
def small_vfs(small_tree):
    return VirtualFileSystem(small_tree)
