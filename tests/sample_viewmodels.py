"""View models and mixins shared by the tests."""

from typing import Optional

from starmixin import ViewModel, ViewModelMixin, data_source_method, data_source_property, view_model_mixin


class InventoryVM(ViewModel):
    """Host view model used across the tests."""
    title: str = "Inventory"
    item_count: int = 0
    refreshed: int = 0
    finalized: bool = False

    def refresh_values(self) -> None:
        self.refreshed += 1

    def on_finalize(self) -> None:
        self.finalized = True

    def execute_done(self) -> None:
        self.title = "done"


class CharacterVM(ViewModel):
    name: str = "Calradian"

    def __init__(self, **data):
        super().__init__(**data)
        # Refresh during construction, before any mixin exists
        self.refresh_values()


@view_model_mixin(refresh_method_name="refresh_values")
class WeightMixin(ViewModelMixin[InventoryVM]):
    def __init__(self, view_model: InventoryVM):
        super().__init__(view_model)
        self._weight = 10
        self.calls = []
        self.refreshes = 0
        self.finalized = False

    @data_source_property
    def weight(self) -> int:
        return self._weight

    @weight.setter
    def weight(self, value: int) -> None:
        self.set_field("_weight", value, "weight")

    @data_source_method
    def execute_add(self, amount: int):
        self.calls.append(("execute_add", amount))

    @data_source_method
    def execute_reset(self):
        self.calls.append(("execute_reset",))

    @data_source_method
    def execute_scale(self, factor: float, label: Optional[str] = None):
        self.calls.append(("execute_scale", factor, label))

    def on_refresh(self):
        self.refreshes += 1

    def on_finalize(self):
        self.finalized = True


class LabelMixin(ViewModelMixin[InventoryVM]):
    def __init__(self, view_model: InventoryVM):
        super().__init__(view_model)
        self.calls = []

    @data_source_property
    def label(self) -> str:
        view_model = self.view_model
        return f"{view_model.title} ({view_model.item_count})" if view_model else ""

    @data_source_method
    def execute_add(self, amount: int):
        self.calls.append(("execute_add", amount))

    @data_source_method
    def execute_label(self):
        self.calls.append(("execute_label",))


@view_model_mixin(refresh_method_name="refresh_values")
class PortraitMixin(ViewModelMixin[CharacterVM]):
    def __init__(self, view_model: CharacterVM):
        super().__init__(view_model)
        self.refreshes = 0

    def on_refresh(self):
        self.refreshes += 1


class SpecialInventoryVM(InventoryVM):
    rarity: str = "rare"


@view_model_mixin(refresh_method_name="refresh_values")
class SpecialMixin(ViewModelMixin[SpecialInventoryVM]):
    def __init__(self, view_model: SpecialInventoryVM):
        super().__init__(view_model)
        self.refreshes = 0

    @data_source_property
    def rarity_label(self) -> str:
        return self.view_model.rarity.upper()

    def on_refresh(self):
        self.refreshes += 1
