"""Fixtures shared by the classmeta tests."""

from typing import Iterator

import pytest

from classmeta.abstract.exceptions import default_error_handler, raise_error
from classmeta.meta.classes import class_registry
from classmeta.meta.types import type_registry


@pytest.fixture(autouse=True)
def restore_registries() -> Iterator[None]:
    """Forget the classes and types declared by a test and restore the default handler."""
    known = set(type_registry().keys())
    yield
    class_registry().clear()
    for key in type_registry().keys():
        if key not in known:
            type_registry().unregister(key)
    default_error_handler(raise_error)
