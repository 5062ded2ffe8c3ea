"""Switch model registry and factory for client creation."""

from __future__ import annotations

from typing import Any, Callable

from switchtopo.base.client import BaseSwitchClient
from switchtopo.config import SwitchProfile
from switchtopo.exceptions import ConfigurationError

_MODEL_REGISTRY: dict[str, tuple[type[BaseSwitchClient], SwitchProfile]] = {}


def register_model(
    name: str, profile: SwitchProfile
) -> Callable[[type[BaseSwitchClient]], type[BaseSwitchClient]]:
    """Decorator to register a client class for a switch model.

    One class may be registered several times with different profiles.

    Usage::

        @register_model("hp3800", HP_3800)
        @register_model("hp5406zl", HP_E5406ZL)
        class HPSwitch(BaseSwitchClient):
            ...
    """

    def decorator(cls: type[BaseSwitchClient]) -> type[BaseSwitchClient]:
        _MODEL_REGISTRY[name.lower()] = (cls, profile)
        return cls

    return decorator


def create_switch(model: str, ip: str, hostname: str, **kwargs: Any) -> BaseSwitchClient:
    """Create a switch client for the given model.

    Args:
        model: Registered model name (e.g. "hp3800", "hp5406zl").
        ip: Switch IP address.
        hostname: Switch host name.
        **kwargs: Client-specific keyword arguments (credentials, community).
            A ``profile`` keyword overrides the registered profile.

    Raises:
        ConfigurationError: If the model is not registered.
    """
    model_lower = model.lower()
    if model_lower not in _MODEL_REGISTRY:
        available = ", ".join(sorted(_MODEL_REGISTRY.keys()))
        raise ConfigurationError(f"Unknown switch model '{model}'. Available: {available}")

    cls, profile = _MODEL_REGISTRY[model_lower]
    kwargs.setdefault("profile", profile)
    return cls(ip=ip, hostname=hostname, **kwargs)


def list_models() -> list[str]:
    """Return a sorted list of registered model names."""
    return sorted(_MODEL_REGISTRY.keys())
