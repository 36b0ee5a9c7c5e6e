"""
Markers, capability indexing and view model type resolution.
"""

from typing import Generic, TypeVar

import pytest

from starmixin import ViewModelMixin, data_source_method, data_source_property
from starmixin.core.capabilities import index_mixin
from starmixin.core.markers import CommandInfo, DataSourceProperty, describe_commands, get_command_info
from starmixin.core.mixin import get_view_model_type

from sample_viewmodels import CharacterVM, InventoryVM, WeightMixin

T = TypeVar('T')


class TestMarkers:
    def test_method_marker_stores_metadata(self):
        info = get_command_info(WeightMixin.execute_add)

        assert isinstance(info, CommandInfo)
        assert info.name == "execute_add"
        assert list(info.signature.parameters) == ["self", "amount"]

    def test_method_marker_with_alias(self):
        class Aliased(ViewModelMixin[InventoryVM]):
            @data_source_method(name="ExecuteSort", description="Sort items")
            def sort(self):
                pass

        info = get_command_info(Aliased.sort)
        assert (info.name, info.method, info.description) == ("ExecuteSort", "sort", "Sort items")
        assert set(describe_commands(Aliased)) == {"ExecuteSort"}

    def test_property_marker_keeps_setter_and_name(self):
        prop = WeightMixin.__dict__["weight"]

        assert isinstance(prop, DataSourceProperty)
        assert prop.exposed_name == "weight"
        assert prop.fset is not None

    def test_unmarked_members_have_no_metadata(self):
        assert get_command_info(WeightMixin.on_refresh) is None


class TestCapabilityIndex:
    def test_index_contains_marked_members_only(self):
        index = index_mixin(WeightMixin(InventoryVM()))

        assert list(index.properties) == ["weight"]
        assert set(index.commands) == {"execute_add", "execute_reset", "execute_scale"}
        assert index.get_command("on_refresh") is None

    def test_accessors_are_bound_to_the_mixin(self):
        mixin = WeightMixin(InventoryVM())
        index = index_mixin(mixin)

        accessor = index.get_property("weight")
        accessor.set(25)

        assert accessor.can_write
        assert accessor.get() == 25
        assert mixin.weight == 25
        index.get_command("execute_add")(4)
        assert mixin.calls == [("execute_add", 4)]

    def test_read_only_property(self):
        class ReadOnly(ViewModelMixin[InventoryVM]):
            @data_source_property
            def fixed(self) -> int:
                return 1

        accessor = index_mixin(ReadOnly(InventoryVM())).get_property("fixed")

        assert not accessor.can_write
        with pytest.raises(AttributeError):
            accessor.set(2)

    def test_index_is_immutable(self):
        index = index_mixin(WeightMixin(InventoryVM()))

        with pytest.raises(TypeError):
            index.commands["execute_new"] = print

    def test_subclass_definition_wins(self):
        class Base(ViewModelMixin[InventoryVM]):
            @data_source_method
            def execute_go(self):
                return "base"

        class Derived(Base):
            @data_source_method
            def execute_go(self):
                return "derived"

        assert index_mixin(Derived(InventoryVM())).get_command("execute_go")() == "derived"

    def test_unmarked_override_replaces_property_and_command_alike(self):
        class Base(ViewModelMixin[InventoryVM]):
            @data_source_property
            def score(self) -> int:
                return 1

            @data_source_method
            def execute_go(self):
                return "base"

        class Derived(Base):
            @property
            def score(self) -> int:
                return 2

            def execute_go(self):
                return "derived"

        index = index_mixin(Derived(InventoryVM()))

        assert index.get_property("score").get() == 2
        assert index.get_command("execute_go")() == "derived"

    def test_later_alias_wins_within_one_class(self):
        class Clash(ViewModelMixin[InventoryVM]):
            @data_source_method(name="execute_go")
            def first(self):
                return "first"

            @data_source_method(name="execute_go")
            def second(self):
                return "second"

        assert index_mixin(Clash(InventoryVM())).get_command("execute_go")() == "second"

    def test_explicit_registration_wins_over_markers(self):
        class Builder(ViewModelMixin[InventoryVM]):
            def __init__(self, view_model):
                super().__init__(view_model)
                self.value = 3
                self.expose("score", lambda: self.value * 2)
                self.expose_command("execute_go", lambda: "explicit")

            @data_source_method
            def execute_go(self):
                return "marker"

        index = index_mixin(Builder(InventoryVM()))

        assert index.get_property("score").get() == 6
        assert index.get_command("execute_go")() == "explicit"


class TestViewModelTypeResolution:
    def test_direct_specialization(self):
        assert get_view_model_type(WeightMixin) is InventoryVM

    def test_inherited_specialization(self):
        class Child(WeightMixin):
            pass

        assert get_view_model_type(Child) is InventoryVM

    def test_specialization_through_generic_intermediate(self):
        class Intermediate(ViewModelMixin[T], Generic[T]):
            pass

        class Concrete(Intermediate[CharacterVM]):
            pass

        assert get_view_model_type(Intermediate) is None
        assert get_view_model_type(Concrete) is CharacterVM

    def test_unspecialized_and_foreign_types(self):
        class Unspecialized(ViewModelMixin):
            pass

        class NotAMixin:
            pass

        assert get_view_model_type(Unspecialized) is None
        assert get_view_model_type(NotAMixin) is None
        assert get_view_model_type("WeightMixin") is None
