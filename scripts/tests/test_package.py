"""Tests for the public package surface."""

import inspect

import pytest

import pom_manager

PUBLIC_CLASSES = [
    getattr(pom_manager, name) for name in pom_manager.__all__
    if inspect.isclass(getattr(pom_manager, name))
]


def test_all_names_resolve():
    for name in pom_manager.__all__:
        assert hasattr(pom_manager, name), name


@pytest.mark.parametrize("cls", PUBLIC_CLASSES, ids=lambda cls: cls.__name__)
def test_public_classes_documented(cls):
    assert cls.__doc__ and cls.__doc__.strip()


def test_service_classes_exported():
    names = {cls.__name__ for cls in PUBLIC_CLASSES}
    assert {"ExecutionOrganizer", "TemplateManager", "StorageError"} <= names
