"""Adapter Factory utilities.

Purpose
-------
Centralize vendor-agnostic creation of adapter instances implementing the
``VendorAdapter`` protocol. Adapters are imported lazily using ``importlib``
so importing the engine does not import every vendor module.

External dependencies
---------------------
- Standard library only (``importlib``).

Scope
-----
Supported vendors: ``openai``, ``anthropic``, ``gemini``, ``grok`` and
``openrouter``. Adding a vendor means adding one map entry and one module;
nothing else (the continuation manager included) changes.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple, Type

from .continuation.strategy import ContinuationStrategy
from .tools import ToolStrategy


class UnknownVendorError(Exception):
    """Raised when a vendor cannot be resolved or its adapter initialized.

    Failure modes include:
    - The vendor name is not registered in the factory mapping.
    - The vendor module cannot be imported or the adapter class is missing.
    - The adapter constructor rejected the given arguments.
    """


class AdapterFactory:
    """Create vendor adapters based on a canonical name (e.g., ``"openai"``)."""

    # Map canonical vendor names to import paths and class names
    _ADAPTERS: Dict[str, Dict[str, str]] = {
        "openai": {"module": "llm_bridge.openai.adapter", "class": "OpenAIAdapter"},
        "anthropic": {"module": "llm_bridge.anthropic.adapter", "class": "AnthropicAdapter"},
        "gemini": {"module": "llm_bridge.gemini.adapter", "class": "GeminiAdapter"},
        "grok": {"module": "llm_bridge.grok.adapter", "class": "GrokAdapter"},
        "openrouter": {"module": "llm_bridge.openrouter.adapter", "class": "OpenRouterAdapter"},
    }

    @classmethod
    def adapter_class(cls, vendor: str) -> Type:
        """Resolve the adapter class for ``vendor`` without instantiating it.

        Raises
        ------
        UnknownVendorError
            If the vendor is unknown, the module fails to import, or the class
            is missing.
        """
        name = (vendor or "").lower().strip()
        spec = cls._ADAPTERS.get(name)
        if not spec:
            raise UnknownVendorError(f"Unknown vendor '{vendor}'")

        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - import failure path
            raise UnknownVendorError(
                f"Failed to import module '{module_path}' for vendor '{vendor}': {exc}"
            ) from exc
        try:
            return getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownVendorError(
                f"Adapter class '{class_name}' not found in '{module_path}' for vendor '{vendor}'"
            ) from exc

    @classmethod
    def create(cls, vendor: str, **kwargs: Any) -> Any:
        """Create an adapter instance (``kwargs`` go to the constructor)."""
        klass = cls.adapter_class(vendor)
        try:
            return klass(**kwargs)
        except TypeError as exc:
            raise UnknownVendorError(
                f"Invalid arguments for '{vendor}' adapter constructor: {exc}"
            ) from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported canonical vendor names in registry order."""
        return tuple(cls._ADAPTERS.keys())

    @classmethod
    def continuation_strategy(cls, vendor: str) -> ContinuationStrategy:
        return cls.adapter_class(vendor).continuation_strategy

    @classmethod
    def tool_strategy(cls, vendor: str) -> ToolStrategy:
        return cls.adapter_class(vendor).tool_strategy


__all__ = ["AdapterFactory", "UnknownVendorError"]
