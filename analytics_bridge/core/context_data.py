"""
Context data mapping.

A ContextDataConfiguration holds the destination's variable mapping
(`event field path -> backend variable`) and the prefix applied to every
property that is not mapped explicitly ("extras").
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from analytics_bridge.core.field_resolver import resolve
from analytics_bridge.core.values import to_backend_string
from analytics_bridge.models.events import Event

# Prefix reserved by the backend for its own context data.
RESERVED_PREFIX = "a."


class ContextDataConfiguration(BaseModel):
    """
    Context data settings.

    - `variables`: event field path -> backend context data variable
    - `prefix`: prefix for extra properties not present in `variables`
    """

    variables: Dict[str, str] = Field(default_factory=dict)
    prefix: str = ""

    model_config = ConfigDict(frozen=True)

    @field_validator("variables", mode="before")
    @classmethod
    def _default_variables(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("prefix", mode="before")
    @classmethod
    def _normalize_prefix(cls, value: Any) -> Any:
        if value is None or value == RESERVED_PREFIX:
            return ""
        return value

    def field_names(self) -> Iterable[str]:
        return self.variables.keys()

    def variable_name(self, field: str) -> Optional[str]:
        return self.variables.get(field)

    def search_value(self, field: str, event: Event) -> Optional[Any]:
        """Resolve a mapped field path against an event."""
        return resolve(field, event)

    def map(
        self,
        properties: Optional[Mapping[str, Any]],
        event: Optional[Event] = None,
        *,
        exclude: Iterable[str] = (),
        stringify_mapped: bool = False,
        stringify_extras: bool = False,
    ) -> Optional[Dict[str, Any]]:
        """
        Build context data from a property bag.

        Mapped fields are resolved against `event` (or the bare properties
        when no event is given) and removed from the extras pool; the
        remaining properties are copied under `prefix + key`. Keys listed
        in `exclude` are never forwarded as extras.

        Returns None for an empty property bag, since an empty context data
        map must not be sent to the backend.
        """
        if not properties:
            return None

        source = event if event is not None else Event(properties=dict(properties))
        excluded = set(exclude)
        extras: Dict[str, Any] = {
            key: value for key, value in properties.items() if key not in excluded
        }

        context_data: Dict[str, Any] = {}
        for field, variable in self.variables.items():
            value = self.search_value(field, source)
            if value is None:
                continue
            context_data[variable] = to_backend_string(value) if stringify_mapped else value
            extras.pop(field, None)

        for key, value in extras.items():
            variable = self.prefix + key
            context_data[variable] = to_backend_string(value) if stringify_extras else value

        return context_data

    def map_by_key(self, properties: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
        """
        Build context data for screens and custom actions.

        Mapped fields are looked up as plain property keys and values are
        forwarded as-is. `products` is never forwarded. Returns None when
        nothing is left to send.
        """
        if not properties:
            return None

        extras: Dict[str, Any] = {
            key: value for key, value in properties.items() if key != "products"
        }
        context_data: Dict[str, Any] = {}
        for field, variable in self.variables.items():
            if field in properties:
                context_data[variable] = properties[field]
                extras.pop(field, None)

        for key, value in extras.items():
            context_data[self.prefix + key] = value

        return context_data or None
