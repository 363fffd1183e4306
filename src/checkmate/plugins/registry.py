# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Plugin registry mapping identifiers to tool adapters."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from .base import Plugin
from .eslint import EslintPlugin
from .phpcs import PhpcsPlugin
from .phpstan import PhpstanPlugin
from .stylelint import StylelintPlugin


class PluginRegistry(Mapping[str, Plugin]):
    """Central registry of tool adapters.

    ``PluginRegistry`` behaves like a read-only mapping whose keys are plugin
    ids and whose values are :class:`Plugin` instances. Adapters are added with
    :meth:`register`; nothing else in the package inspects tool identity.
    """

    def __init__(self, plugins: Iterable[Plugin] = ()) -> None:
        """Initialise the registry with ``plugins``.

        Args:
            plugins: Adapters registered in iteration order.
        """

        self._plugins: dict[str, Plugin] = {}
        for plugin in plugins:
            self.register(plugin)

    def register(self, plugin: Plugin) -> None:
        """Register ``plugin`` enforcing uniqueness by id.

        Args:
            plugin: Adapter to insert into the registry.

        Raises:
            ValueError: If an adapter with the same id is already registered.
        """

        if plugin.id in self._plugins:
            raise ValueError(f"Plugin '{plugin.id}' already registered")
        self._plugins[plugin.id] = plugin

    def try_get(self, plugin_id: str) -> Plugin | None:
        """Return the adapter registered under ``plugin_id`` or ``None``."""

        return self._plugins.get(plugin_id)

    def __len__(self) -> int:
        return len(self._plugins)

    def __iter__(self) -> Iterator[str]:
        return iter(self._plugins)

    def __getitem__(self, plugin_id: str) -> Plugin:
        return self._plugins[plugin_id]


def build_default_registry() -> PluginRegistry:
    """Return a registry holding every built-in adapter."""

    return PluginRegistry((PhpcsPlugin(), PhpstanPlugin(), EslintPlugin(), StylelintPlugin()))


DEFAULT_REGISTRY = build_default_registry()


__all__ = ["DEFAULT_REGISTRY", "PluginRegistry", "build_default_registry"]
