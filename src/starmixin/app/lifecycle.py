"""
Mixin Lifecycle Manager

Creates, refreshes and finalizes the mixins of one module for view model
instances. Called from the interception layer; never raises to it.
"""

import logging
from typing import Any, Callable, List, Optional, Type

from ..config import get_config
from ..core.capabilities import PropertyAccessor, index_mixin
from ..core.utils import invoke_with_log
from ..core.weak import WeakInstanceTable
from .cache import MixinInstanceCache, MixinRecord
from .registry import MixinRegistry

logger = logging.getLogger(__name__)

PropertyExposer = Callable[[Any, str, PropertyAccessor], None]


def expose_on_instance(instance: Any, name: str, accessor: PropertyAccessor) -> None:
    """Default property exposure: hand the accessor to ``instance.expose_property`` if the host has one."""
    expose = getattr(instance, 'expose_property', None)
    if callable(expose):
        expose(name, accessor)
    else:
        logger.debug(f"{type(instance).__name__} has no data binding, property '{name}' not exposed")


class MixinLifecycleManager:
    """
    Per-module mixin lifecycle.

    - ``on_construct`` builds the missing mixins of an instance (idempotent)
    - ``on_refresh`` forwards the view model's refresh to every mixin
    - ``on_teardown`` forwards the view model's finalization to every mixin
    """

    def __init__(self, module_name: str, registry: MixinRegistry, cache: MixinInstanceCache,
                 property_exposer: Optional[PropertyExposer] = None):
        self.module_name = module_name
        self.registry = registry
        self.cache = cache
        self.property_exposer = property_exposer or expose_on_instance
        # Instances whose refresh fired before their mixins existed
        self._pending_refresh: WeakInstanceTable[bool] = WeakInstanceTable()

    def on_construct(self, target_type: Type, instance: Any) -> List[MixinRecord]:
        """Create mixins registered for ``target_type`` that ``instance`` does not have yet."""
        try:
            records = self.cache.get_or_create(instance)
        except TypeError:
            logger.error(f"{self.module_name}: {type(instance).__name__} instances cannot be weakly referenced, no mixins created")
            return []

        present = {record.mixin_type for record in records}
        created = []
        for mixin_type in self.registry.get(target_type):
            if mixin_type in present:
                continue
            present.add(mixin_type)

            try:
                mixin = mixin_type(instance)
            except Exception:
                logger.exception(f"{self.module_name}: failed to create {mixin_type.__name__} for {target_type.__name__}")
                continue

            record = MixinRecord(mixin=mixin, index=index_mixin(mixin))
            records.append(record)
            created.append(record)

        for record in created:
            for name, accessor in record.index.properties.items():
                try:
                    self.property_exposer(instance, name, accessor)
                except Exception:
                    logger.exception(f"{self.module_name}: failed to expose property '{name}' of {record.mixin_type.__name__}")

        if created:
            logger.debug(f"{self.module_name}: created {len(created)} mixin(s) for {target_type.__name__}")

        if self._pending_refresh.pop(instance) and created:
            self.on_refresh(instance)

        return created

    def on_refresh(self, instance: Any) -> None:
        """Call ``on_refresh`` on every mixin of ``instance``, in registration order."""
        records = self.cache.get(instance)
        if records is None:
            if get_config().lifecycle.replay_constructor_refresh:
                self._remember_refresh(instance)
            return

        for record in list(records):
            hook = getattr(record.mixin, 'on_refresh', None)
            if callable(hook):
                invoke_with_log(hook)

    def on_teardown(self, instance: Any) -> None:
        """Call ``on_finalize`` on every mixin of ``instance``, in registration order."""
        records = self.cache.get(instance)
        if records is None:
            return

        for record in list(records):
            hook = getattr(record.mixin, 'on_finalize', None)
            if callable(hook):
                invoke_with_log(hook)

    def _remember_refresh(self, instance: Any) -> None:
        try:
            self._pending_refresh.set(instance, True)
        except TypeError:
            logger.debug(f"{self.module_name}: cannot track refresh of {type(instance).__name__}")
