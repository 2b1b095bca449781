"""
Unit tests for InstanceMaterializer and writable field lookup.
"""

import pytest

from factoryman.core.errors import NoDefaultConstructorError, UnknownPropertyError
from factoryman.services.instance_materializer import InstanceMaterializer, get_writable_field
from factoryman.services.override_resolver import ResolvedProperty
from tests.support.models import Badge, Dog, FrozenPoint, Owner, Recorder, SlottedPoint, Ticket


class TestGetWritableField:
    """Test writable field detection"""

    def test_property_with_setter(self):
        """Test a property with a setter is writable"""
        assert get_writable_field(Dog(), 'name') is not None

    def test_read_only_property(self):
        """Test a property without a setter is not writable"""
        assert get_writable_field(Dog(), 'is_saved') is None
        assert get_writable_field(Badge(), 'code') is None

    def test_methods_are_not_fields(self):
        """Test methods are never writable fields"""
        assert get_writable_field(Dog(), 'save') is None

    def test_instance_and_class_attributes(self):
        """Test instance attributes and class-level defaults are writable"""
        assert get_writable_field(Dog(), 'breed') is not None
        assert get_writable_field(Badge(), 'color') is not None

    def test_dataclass_fields(self):
        """Test dataclass fields are writable"""
        assert get_writable_field(Owner(), 'nickname') is not None

    def test_slots(self):
        """Test slot members are writable and unknown names are not"""
        assert get_writable_field(SlottedPoint(), 'x') is not None
        assert get_writable_field(SlottedPoint(), 'z') is None

    def test_unknown_and_dunder_names(self):
        """Test unknown, dunder and non-identifier names are not writable"""
        assert get_writable_field(Owner(), 'missing') is None
        assert get_writable_field(Owner(), '__class__') is None
        assert get_writable_field(Owner(), 'not a name') is None

    def test_setter_assigns(self):
        """Test the returned accessor sets the value"""
        dog = Dog()
        get_writable_field(dog, 'breed')(dog, "Lab")

        assert dog.breed == "Lab"


class TestInstanceMaterializer:
    """Test cases for InstanceMaterializer"""

    def setup_method(self):
        """Setup a strict materializer for tests."""
        self.materializer = InstanceMaterializer()

    def test_instantiate_requires_no_argument_constructor(self):
        """Test NoDefaultConstructorError for required constructor arguments"""
        with pytest.raises(NoDefaultConstructorError) as exc_info:
            self.materializer.instantiate(Ticket)

        assert exc_info.value.details == {"target_type": "Ticket"}

    def test_instantiate_abstract_type_fails(self):
        """Test abstract classes are rejected"""
        from abc import ABC, abstractmethod

        class Shape(ABC):
            @abstractmethod
            def area(self):
                pass

        with pytest.raises(NoDefaultConstructorError):
            self.materializer.instantiate(Shape)

    def test_instantiate_builtin(self):
        """Test builtins without introspectable signatures still instantiate"""
        assert self.materializer.instantiate(object) is not None

    def test_materialize_in_order(self):
        """Test entries are assigned once each, in the given order"""
        resolved = [
            ResolvedProperty('second', 2, False),
            ResolvedProperty('first', lambda r: r.second + 1, True),
        ]

        recorder = self.materializer.materialize(Recorder, resolved)

        assert recorder.assignments == ['second', 'first']
        assert recorder.first == 3

    def test_functions_receive_in_progress_instance(self):
        """Test function entries see earlier assignments"""
        resolved = [
            ResolvedProperty('name', "Rover", False),
            ResolvedProperty('breed', lambda d: f"Lab for {d.name}", True),
        ]

        dog = self.materializer.materialize(Dog, resolved)

        assert dog.breed == "Lab for Rover"

    def test_unknown_property_fails(self):
        """Test unknown names raise UnknownPropertyError"""
        with pytest.raises(UnknownPropertyError) as exc_info:
            self.materializer.materialize(Owner, [ResolvedProperty('colour', "red", False)])

        assert exc_info.value.details == {"property": "colour", "target_type": "Owner"}
        assert isinstance(exc_info.value, AttributeError)

    def test_read_only_property_fails(self):
        """Test read-only properties raise UnknownPropertyError"""
        with pytest.raises(UnknownPropertyError):
            self.materializer.assign(Badge(), 'code', "x")

    def test_frozen_dataclass_fails(self):
        """Test frozen dataclass fields are reported as not writable"""
        with pytest.raises(UnknownPropertyError, match="read-only"):
            self.materializer.materialize(FrozenPoint, [ResolvedProperty('x', 1, False)])

    def test_non_strict_attaches_unknown_names(self):
        """Test non-strict mode attaches new attributes"""
        materializer = InstanceMaterializer(strict_fields=False)

        owner = materializer.materialize(Owner, [ResolvedProperty('colour', "red", False)])

        assert owner.colour == "red"

    def test_non_strict_still_rejects_methods_and_slots(self):
        """Test non-strict mode does not shadow methods or extend slotted types"""
        materializer = InstanceMaterializer(strict_fields=False)

        with pytest.raises(UnknownPropertyError):
            materializer.assign(Dog(), 'save', "x")
        with pytest.raises(UnknownPropertyError):
            materializer.assign(SlottedPoint(), 'z', 1)
