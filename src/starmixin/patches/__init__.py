from .patcher import Patcher
from .viewmodel_patch import ViewModelPatch, ViewModelWithMixinPatch, get_module_patcher, unpatch_all

__all__ = [
    "Patcher",
    "ViewModelPatch",
    "ViewModelWithMixinPatch",
    "get_module_patcher",
    "unpatch_all",
]
