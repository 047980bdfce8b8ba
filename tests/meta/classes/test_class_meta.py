"""
MIT License

Copyright (c) 2025 Sébastien Gachoud

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

-------------------------------------------------------------------------------

Author: Sébastien Gachoud
Created: 2026-10-19
Description: Tests for the ClassMeta front-end and the class descriptors: inheritance,
            introspection, methods and error handlers.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import pytest

from classmeta.abstract.exceptions import default_error_handler
from classmeta.meta.classes import (
    AttributeDescriptor,
    ClassDescriptor,
    ClassMeta,
    ConstructorDescriptor,
    MethodDescriptor,
    class_registry,
)
from classmeta.meta.constants import AccessorStrategy, Context, Visibility
from classmeta.meta.errors import (
    AccessDeniedError,
    DeclarationError,
    DuplicateAttributeError,
    NoSuchAttributeError,
    SealedError,
    ValidationError,
)
from classmeta.meta.types import lookup_type, type_registry


# =============================================================================
# Declaration Tests
# =============================================================================


class TestClassMetaDeclaration:
    """Test declaring classes."""

    def test_registration(self):
        """Test that a declared class is registered by class and by key."""

        class Person:
            """Test"""

        meta = ClassMeta(Person, key="person", name="A person", description="Someone")
        descriptor = meta.descriptor

        assert isinstance(descriptor, ClassDescriptor)
        assert descriptor.key == "person"
        assert descriptor.name == "A person"
        assert descriptor.description == "Someone"
        assert ClassMeta.for_class(Person) is descriptor
        assert ClassMeta.for_class(Person()) is descriptor
        assert ClassMeta.for_key("person") is descriptor
        assert Person in class_registry()

    def test_default_key(self):
        """Test that the key defaults to the module and qualified name."""

        class Person:
            """Test"""

        descriptor = ClassMeta(Person).descriptor

        assert descriptor.key == f"{Person.__module__}.{Person.__qualname__}"
        assert descriptor.name == Person.__qualname__

    def test_key_registered_as_type(self):
        """Test that other classes can declare attributes of a declared class."""

        class Address:
            """Test"""

        class Person:
            """Test"""

        ClassMeta(Address, key="address").build()
        meta = ClassMeta(Person)
        meta.add_attribute("home", "address")
        meta.build()
        person = Person()
        home = Address()

        assert lookup_type("address").name == Address.__qualname__
        person.home(home)
        assert person.home() is home
        with pytest.raises(ValidationError) as exc_info:
            person.home("Baker Street")

        assert "Address object for attribute 'home'" in str(exc_info.value)

    def test_same_class_twice(self):
        """Test that a class cannot be declared twice, with its default key or another."""

        class Person:
            """Test"""

        ClassMeta(Person)

        with pytest.raises(DeclarationError) as exc_info:
            ClassMeta(Person)
        assert "Class object for class" in str(exc_info.value)

        with pytest.raises(DeclarationError) as exc_info:
            ClassMeta(Person, key="other")
        assert "Class object for class" in str(exc_info.value)
        assert not type_registry().has_type("other")

    def test_same_key_twice(self):
        """Test that a key cannot be used by two classes."""

        class Person:
            """Test"""

        class Robot:
            """Test"""

        ClassMeta(Person, key="person")

        with pytest.raises(DeclarationError):
            ClassMeta(Robot, key="person")

        assert ClassMeta.for_class(Robot) is None

    def test_key_of_builtin_type(self):
        """Test that a class cannot be registered under a built-in type key."""

        class Person:
            """Test"""

        with pytest.raises(DeclarationError) as exc_info:
            ClassMeta(Person, key="string")

        assert str(exc_info.value) == "Type 'string' is already registered"
        assert Person not in class_registry()

    def test_not_a_class(self):
        """Test that only classes can be declared."""
        with pytest.raises(DeclarationError):
            ClassMeta("Person")  # type: ignore

    def test_trusted_must_be_classes(self):
        """Test that trusted entries are classes."""

        class Person:
            """Test"""

        with pytest.raises(DeclarationError):
            ClassMeta(Person, trusted=["Friend"])  # type: ignore

    def test_single_trusted_class(self):
        """Test that a single trusted class is accepted."""

        class Friend:
            """Test"""

        class Person:
            """Test"""

        assert ClassMeta(Person, trusted=Friend).descriptor.trusted == (Friend,)

    def test_error_handler_must_be_callable(self):
        """Test that the error handler is callable."""

        class Person:
            """Test"""

        with pytest.raises(DeclarationError):
            ClassMeta(Person, error_handler="raise")  # type: ignore


# =============================================================================
# Build Tests
# =============================================================================


class TestBuild:
    """Test building classes."""

    def test_my_class(self):
        """Test that built classes and their instances return their descriptor."""

        class Person:
            """Test"""

        meta = ClassMeta(Person).build()

        assert meta.descriptor.built
        assert Person.my_class() is meta.descriptor
        assert Person().my_class() is meta.descriptor

    def test_sealed_after_build(self):
        """Test that nothing can be declared after build."""

        class Person:
            """Test"""

        meta = ClassMeta(Person).build()

        with pytest.raises(SealedError):
            meta.add_attribute("age", "integer")
        with pytest.raises(SealedError):
            meta.add_attribute("age", "no_such_type")
        with pytest.raises(SealedError):
            meta.add_constructor("new")
        with pytest.raises(SealedError):
            meta.add_method("run", lambda self: None)
        with pytest.raises(SealedError):
            meta.build()

    def test_sealed_registry(self):
        """Test that a sealed registry rejects new classes until cleared."""

        class Person:
            """Test"""

        class Robot:
            """Test"""

        ClassMeta(Person).build()
        class_registry().seal()

        assert class_registry().sealed
        with pytest.raises(SealedError):
            ClassMeta(Robot)
        assert len(class_registry()) == 1

        class_registry().clear()
        assert not class_registry().sealed
        assert len(class_registry()) == 0

    def test_capabilities(self):
        """Test that generated callables are reachable by name through the descriptor."""

        class Person:
            """Test"""

        meta = ClassMeta(Person, accessor_strategy="semi-affordance")
        meta.add_constructor("new")
        meta.add_attribute("age", "integer")
        meta.build()
        descriptor = meta.descriptor
        person = descriptor.call("new", Person, age=3)

        assert set(descriptor.capabilities) == {"new", "age", "set_age"}
        assert descriptor.call("age", person) == 3
        descriptor.call("set_age", person, 4)
        assert person.age() == 4

    def test_call_unknown(self):
        """Test that calling an unknown capability fails."""

        class Person:
            """Test"""

        descriptor = ClassMeta(Person).build().descriptor

        with pytest.raises(NoSuchAttributeError) as exc_info:
            descriptor.call("fly", Person())

        assert exc_info.value.names == ("fly",)

    def test_class_attribute_shared(self):
        """Test that a class attribute set on an instance is read on the class."""

        class Person:
            """Test"""

        meta = ClassMeta(Person)
        meta.add_constructor("new")
        meta.add_attribute("population", "whole", context=Context.CLASS)
        meta.build()
        first, second = Person.new(), Person.new()

        second.population(8)
        assert first.population() == 8
        assert Person.population() == 8


# =============================================================================
# Inheritance Tests
# =============================================================================


class TestInheritance:
    """Test the inheritance of attributes."""

    @staticmethod
    def declare_parent():
        """Declare and build a Parent class with name and age."""

        class Parent:
            """Test"""

        meta = ClassMeta(Parent)
        meta.add_constructor("new")
        meta.add_attribute("name", "string", default="parent")
        meta.add_attribute("age", "integer")
        meta.build()
        return Parent

    def test_inherited_attributes_first(self):
        """Test that inherited attributes come first, in declaration order."""
        Parent = self.declare_parent()
        Child = type("Child", (Parent,), {})
        meta = ClassMeta(Child)
        meta.add_attribute("school", "string")
        meta.build()

        names = [attribute.name for attribute in Child.my_class().attributes()]
        assert names == ["name", "age", "school"]
        assert Child.my_class().parents == (Parent.my_class(),)
        assert Child.my_class().is_a(Parent)
        assert not Parent.my_class().is_a(Child)

    def test_duplicate_inherited(self):
        """Test that redeclaring an inherited attribute needs override."""
        Parent = self.declare_parent()
        Child = type("Child", (Parent,), {})
        meta = ClassMeta(Child)

        with pytest.raises(DuplicateAttributeError) as exc_info:
            meta.add_attribute("age", "whole")

        assert "(inherited from" in str(exc_info.value)

    def test_duplicate_own(self):
        """Test that an attribute cannot be declared twice in a class."""

        class Person:
            """Test"""

        meta = ClassMeta(Person)
        meta.add_attribute("age", "integer")

        with pytest.raises(DuplicateAttributeError):
            meta.add_attribute("age", "integer")

    def test_override(self):
        """Test that an override replaces the attribute in the subclass only."""
        Parent = self.declare_parent()
        Child = type("Child", (Parent,), {})
        meta = ClassMeta(Child)
        meta.add_attribute("age", "whole", override=True)
        meta.build()
        child, parent = Child.new(), Parent.new()

        names = [attribute.name for attribute in Child.my_class().attributes()]
        assert names == ["name", "age"]
        assert Child.my_class().attributes("age")[0].type_key == "whole"
        assert Parent.my_class().attributes("age")[0].type_key == "integer"
        parent.age(0)
        with pytest.raises(ValidationError):
            child.age(0)
        child.age(1)
        assert child.age() == 1
        assert child.name() == "parent"

    def test_nearest_ancestor_wins(self):
        """Test that an override in an intermediate class is inherited."""
        Parent = self.declare_parent()
        Middle = type("Middle", (Parent,), {})
        meta = ClassMeta(Middle)
        meta.add_attribute("name", "string", default="middle", override=True)
        meta.build()
        Leaf = type("Leaf", (Middle,), {})
        ClassMeta(Leaf).build()

        attributes = Leaf.my_class().attributes()
        assert [attribute.name for attribute in attributes] == ["name", "age"]
        assert attributes[0].owner is Middle.my_class()
        assert Leaf.new().name() == "middle"

    def test_for_class_unregistered_subclass(self):
        """Test that undeclared subclasses resolve to their closest declared ancestor."""
        Parent = self.declare_parent()
        Orphan = type("Orphan", (Parent,), {})

        assert ClassMeta.for_class(Orphan) is Parent.my_class()
        assert Orphan not in class_registry()


# =============================================================================
# Introspection Tests
# =============================================================================


class TestIntrospection:
    """Test listing members by visibility."""

    @staticmethod
    def declare_vault():
        """Declare a Vault with a member of each visibility."""

        class Friend:
            """Test"""

        class Vault:
            """Test"""

        meta = ClassMeta(Vault, trusted=Friend)
        meta.add_attribute("owner", "string")
        meta.add_attribute("audit", "string", visibility=Visibility.TRUSTED)
        meta.add_attribute("code", "integer", visibility=Visibility.PROTECTED)
        meta.add_attribute("secret", "string", visibility=Visibility.PRIVATE)
        meta.build()
        return Vault, Friend

    @staticmethod
    def names(attributes) -> list[str]:
        """Names of attribute descriptors."""
        return [attribute.name for attribute in attributes]

    def test_public_by_default(self):
        """Test that anonymous callers see public members only."""
        Vault, _ = self.declare_vault()

        assert self.names(Vault.my_class().attributes()) == ["owner"]

    def test_views(self):
        """Test the explicit minimum visibilities."""
        Vault, _ = self.declare_vault()
        descriptor = Vault.my_class()

        assert self.names(descriptor.attributes(view=Visibility.TRUSTED)) == ["owner", "audit"]
        assert self.names(descriptor.attributes(view=Visibility.PROTECTED)) == [
            "owner",
            "audit",
            "code",
        ]
        assert self.names(descriptor.attributes(view=Visibility.PRIVATE)) == [
            "owner",
            "audit",
            "code",
            "secret",
        ]

    def test_views_from_caller(self):
        """Test the visibility derived from the caller."""
        Vault, Friend = self.declare_vault()
        SubVault = type("SubVault", (Vault,), {})
        descriptor = Vault.my_class()

        assert descriptor.view_for(Vault) is Visibility.PRIVATE
        assert descriptor.view_for(SubVault()) is Visibility.PROTECTED
        assert descriptor.view_for(Friend) is Visibility.TRUSTED
        assert descriptor.view_for(object) is Visibility.PUBLIC
        assert self.names(descriptor.attributes(caller=Friend)) == ["owner", "audit"]

    def test_named_lookup(self):
        """Test that named lookups keep the requested order, whatever the visibility."""
        Vault, _ = self.declare_vault()

        attributes = Vault.my_class().attributes("secret", "missing", "owner")

        assert self.names(attributes) == ["secret", "owner"]

    def test_trusted_accessor(self):
        """Test that trusted accessors admit trusted classes and their subclasses."""
        Vault, Friend = self.declare_vault()
        BestFriend = type("BestFriend", (Friend,), {})
        vault = Vault()

        vault.audit("ok", caller=BestFriend)
        assert vault.audit(caller=Friend) == "ok"
        with pytest.raises(AccessDeniedError) as exc_info:
            vault.audit()

        assert "audit is a trusted attribute of" in str(exc_info.value)


# =============================================================================
# Methods Tests
# =============================================================================


class TestMethods:
    """Test the declaration of methods."""

    def test_code_installed(self):
        """Test that a public method given as code is installed as is."""

        class Person:
            """Test"""

        def greet(self, other):
            return f"{self.name()} greets {other}"

        meta = ClassMeta(Person)
        meta.add_attribute("name", "string")
        method = meta.add_method("greet", greet, description="Says hello")
        meta.build()
        person = Person()
        person.name("Ada")

        assert Person.greet is greet
        assert person.greet("Grace") == "Ada greets Grace"
        assert method.call(person, "Alan") == "Ada greets Alan"
        assert method.description == "Says hello"
        assert Person.my_class().methods()[0] is method

    def test_existing_method(self):
        """Test that a method already defined on the class can be declared."""

        class Person:
            """Test"""

            def shout(self):
                """Test"""
                return "HEY"

        meta = ClassMeta(Person)
        method = meta.add_method("shout")
        meta.build()

        assert method.call(Person()) == "HEY"
        assert Person.my_class().call("shout", Person()) == "HEY"

    def test_missing_method(self):
        """Test that a method without code must exist on the class."""

        class Person:
            """Test"""

        meta = ClassMeta(Person)
        meta.add_method("shout")

        with pytest.raises(DeclarationError):
            meta.build()

    def test_private_method(self):
        """Test that a private method takes a caller token."""

        class Person:
            """Test"""

        meta = ClassMeta(Person)
        meta.add_method("whisper", lambda self, word: word.lower(), visibility="private")
        meta.build()
        person = Person()

        assert person.whisper("HUSH", caller=Person) == "hush"
        with pytest.raises(AccessDeniedError) as exc_info:
            person.whisper("HUSH")

        assert "whisper is a private method of" in str(exc_info.value)

    def test_class_method(self):
        """Test that class context methods receive the class."""

        class Person:
            """Test"""

        meta = ClassMeta(Person)
        meta.add_method("kind", lambda cls: cls.__name__, context="class")
        meta.build()

        assert Person.kind() == "Person"
        assert Person().kind() == "Person"

    def test_name_collision_with_constructor(self):
        """Test that methods and constructors share their names."""

        class Person:
            """Test"""

        meta = ClassMeta(Person)
        meta.add_constructor("new")

        with pytest.raises(DeclarationError):
            meta.add_method("new", lambda self: None)

    def test_non_callable_code(self):
        """Test that the code of a method must be callable."""

        class Person:
            """Test"""

        with pytest.raises(DeclarationError):
            ClassMeta(Person).add_method("run", code="print")


# =============================================================================
# Error Handler Tests
# =============================================================================


class AppError(Exception):
    """Test"""


def translate(error: Exception):
    """Test error handler."""
    raise AppError(str(error)) from error


class TestErrorHandlers:
    """Test the routing of errors through the class error handler."""

    def test_class_handler(self):
        """Test that the class handler receives the errors of the class."""

        class Person:
            """Test"""

        meta = ClassMeta(Person, error_handler=translate)
        meta.add_attribute("age", "integer")
        meta.build()

        with pytest.raises(AppError) as exc_info:
            Person().age("ten")

        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_declaration_errors_use_class_handler(self):
        """Test that declaration errors go through the class handler too."""

        class Person:
            """Test"""

        meta = ClassMeta(Person, error_handler=translate)

        with pytest.raises(AppError):
            meta.add_attribute("age", "no_such_type")

    def test_process_wide_handler(self):
        """Test that classes without handler use the process-wide one."""

        class Person:
            """Test"""

        meta = ClassMeta(Person)
        meta.add_attribute("age", "integer")
        meta.build()
        default_error_handler(translate)

        with pytest.raises(AppError):
            Person().age(0.5)

    def test_returning_handler(self):
        """Test that an error is raised even if the handler returns."""
        seen = []

        class Person:
            """Test"""

        meta = ClassMeta(Person, error_handler=seen.append)
        meta.add_attribute("age", "integer")
        meta.build()

        with pytest.raises(ValidationError):
            Person().age(0.5)

        assert len(seen) == 1


# =============================================================================
# Configuration Tests
# =============================================================================


class TestClassStrategy:
    """Test the accessor strategy of a class."""

    def test_class_strategy(self):
        """Test that the class strategy applies to all its attributes."""

        class Person:
            """Test"""

        meta = ClassMeta(Person, accessor_strategy=AccessorStrategy.AFFORDANCE)
        meta.add_attribute("name", "string")
        meta.add_attribute("age", "integer")
        meta.build()

        assert set(Person.my_class().capabilities) == {
            "get_name",
            "set_name",
            "get_age",
            "set_age",
        }

    def test_class_type_cleaned(self):
        """Test that the class type keys do not leak between tests."""
        assert not any(key.endswith("<locals>.Person") for key in type_registry().keys())


# =============================================================================
# Descriptor Classes Tests
# =============================================================================


class TestDescriptorClasses:
    """Test the descriptor classes a ClassMeta declares with."""

    def test_defaults(self):
        """Test that the base descriptor classes are used by default."""

        class Person:
            """Test"""

        meta = ClassMeta(Person)

        assert type(meta.descriptor) is ClassDescriptor
        assert type(meta.add_attribute("name", "string")) is AttributeDescriptor
        assert type(meta.add_constructor("new")) is ConstructorDescriptor
        assert type(meta.add_method("greet", lambda self: "hi")) is MethodDescriptor

    def test_custom_classes(self):
        """Test that subclasses of the descriptors are used by the declarations."""

        class Described(ClassDescriptor):
            """Test"""

        class Field(AttributeDescriptor):
            """Test"""

        class Factory(ConstructorDescriptor):
            """Test"""

        class Action(MethodDescriptor):
            """Test"""

        class Person:
            """Test"""

        meta = ClassMeta(
            Person,
            class_class=Described,
            constructor_class=Factory,
            attribute_class=Field,
            method_class=Action,
        )
        field = meta.add_attribute("name", "string")
        meta.add_constructor("new")
        meta.add_method("greet", lambda self: f"Hi {self.name()}")
        meta.build()

        assert isinstance(meta.descriptor, Described)
        assert ClassMeta.for_class(Person) is meta.descriptor
        assert isinstance(field, Field)
        assert isinstance(meta.descriptor.constructors("new")[0], Factory)
        assert isinstance(meta.descriptor.methods("greet")[0], Action)
        assert Person.new(name="Ada").greet() == "Hi Ada"

    @pytest.mark.parametrize(
        "parameter", ["class_class", "constructor_class", "attribute_class", "method_class"]
    )
    def test_not_a_descriptor_class(self, parameter):
        """Test that descriptor classes must derive from the base descriptors."""

        class Person:
            """Test"""

        with pytest.raises(DeclarationError) as exc_info:
            ClassMeta(Person, **{parameter: dict})

        assert f"Parameter '{parameter}' must be a subclass of" in str(exc_info.value)
        assert Person not in class_registry()
