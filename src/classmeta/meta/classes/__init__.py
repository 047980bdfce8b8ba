"""Class declarations and descriptors of classmeta."""

from .attribute import AttributeDescriptor
from .class_meta import ClassMeta
from .constructor import ConstructorDescriptor, generated_constructor
from .descriptor import ClassDescriptor
from .method import MethodDescriptor
from .registry import ClassRegistry, class_registry

__all__ = [
    "AttributeDescriptor",
    "ClassDescriptor",
    "ClassMeta",
    "ClassRegistry",
    "ConstructorDescriptor",
    "MethodDescriptor",
    "class_registry",
    "generated_constructor",
]
