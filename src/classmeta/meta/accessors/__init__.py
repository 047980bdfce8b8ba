"""Accessor generation of classmeta."""

from .builder import (
    AccessorBuilder,
    Accessors,
    AffordanceAccessorBuilder,
    CustomAccessorBuilder,
    DefaultAccessorBuilder,
    SemiAffordanceAccessorBuilder,
    builder_for,
    make_getter,
    make_setter,
)
from .storage import ClassStorage, InstanceStorage, instance_storage

__all__ = [
    "AccessorBuilder",
    "Accessors",
    "AffordanceAccessorBuilder",
    "CustomAccessorBuilder",
    "DefaultAccessorBuilder",
    "SemiAffordanceAccessorBuilder",
    "builder_for",
    "make_getter",
    "make_setter",
    "ClassStorage",
    "InstanceStorage",
    "instance_storage",
]
