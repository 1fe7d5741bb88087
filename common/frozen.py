"""Model mixin that refuses to rewrite fields fixed at creation.

Checkout sessions and orders carry prices and line snapshots that must never
change after they are first saved, and state fields that only move forward.
The values loaded from the database are remembered and compared on every
`save()`; any change to a frozen field, or a state moving backwards, raises
`FrozenFieldError` before the write reaches the database.
"""

from copy import deepcopy

from django.db.models import DEFERRED

from .exceptions import FrozenFieldError


class FrozenFieldsMixin:
    # attnames that may not change once the row exists
    frozen_fields: tuple = ()
    # attname -> allowed values in forward order
    forward_only: dict = {}

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        instance._loaded_values = {
            name: deepcopy(value) for name, value in zip(field_names, values) if value is not DEFERRED
        }
        return instance

    def _remember_loaded_values(self):
        self._loaded_values = {
            f.attname: deepcopy(getattr(self, f.attname))
            for f in self._meta.concrete_fields
            if f.attname in self.__dict__
        }

    def check_frozen_fields(self):
        loaded = getattr(self, "_loaded_values", None)
        if not loaded:
            return
        for name in self.frozen_fields:
            if name in loaded and getattr(self, name) != loaded[name]:
                raise FrozenFieldError(f"{type(self).__name__}.{name} cannot change once saved")
        for name, order in self.forward_only.items():
            before, after = loaded.get(name), getattr(self, name)
            if before == after or before not in order or after not in order:
                continue
            if order.index(after) < order.index(before):
                raise FrozenFieldError(f"{type(self).__name__}.{name} cannot move from {before!r} to {after!r}")

    def refresh_from_db(self, *args, **kwargs):
        super().refresh_from_db(*args, **kwargs)
        self._remember_loaded_values()

    def save(self, *args, **kwargs):
        self.check_frozen_fields()
        super().save(*args, **kwargs)
        self._remember_loaded_values()
