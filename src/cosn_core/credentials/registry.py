"""Credentials provider registry.

This module manages the registry of credentials provider types that can be
named in configuration. Each entry records the provider type and the
construction strategy used to instantiate it. Types are validated once, when
they are registered, so the registry only ever holds concrete provider types
with a supported construction strategy.
"""

import importlib
import inspect
import threading
import types
import typing
from dataclasses import dataclass
from enum import Enum

import structlog
from yarl import URL

from cosn_core.configuration import Configuration
from cosn_core.exceptions import (
    ConfigurationTypeError,
    InstantiationError,
    NoConstructionStrategyError,
)

from .base import (
    CredentialsProvider,
    is_credentials_provider,
    is_credentials_provider_type,
)

# Get logger for this module
logger = structlog.get_logger(__name__)

NOT_CREDENTIALS_PROVIDER = "is not a cos credential provider"
ABSTRACT_CREDENTIALS_PROVIDER = "is abstract and therefore cannot be created"
INSTANTIATION_EXCEPTION = "instantiation exception"

FACTORY_METHOD_NAME = "get_instance"


class ConstructionStrategy(Enum):
    """Supported ways of constructing a provider, in priority order."""

    NO_ARGS = "no_args"
    CONFIGURATION = "configuration"
    URI_AND_CONFIGURATION = "uri_and_configuration"
    GET_INSTANCE = "get_instance"


# Types of the values passed positionally to the constructor, per strategy.
_ARGUMENT_TYPES: dict[ConstructionStrategy, tuple[tuple[type, ...], ...]] = {
    ConstructionStrategy.NO_ARGS: (),
    ConstructionStrategy.CONFIGURATION: ((Configuration,),),
    ConstructionStrategy.URI_AND_CONFIGURATION: ((URL, str), (Configuration,)),
}


def type_name(provider_type: type) -> str:
    """Return the dotted name of a type."""
    return f"{provider_type.__module__}.{provider_type.__qualname__}"


def _signature(provider_type: type) -> inspect.Signature | None:
    try:
        return inspect.signature(provider_type, eval_str=True)
    except Exception:  # noqa: BLE001, S110
        # Annotations that cannot be evaluated are compared by name.
        pass
    try:
        return inspect.signature(provider_type)
    except (TypeError, ValueError):
        return None


def _positional_annotations(signature: inspect.Signature, count: int) -> list[object]:
    """Return the annotation receiving each of ``count`` positional arguments."""
    annotations: list[object] = []
    for parameter in signature.parameters.values():
        if len(annotations) == count:
            break
        if parameter.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            annotations.append(parameter.annotation)
        elif parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            annotations.extend([parameter.annotation] * (count - len(annotations)))
    return annotations


def _annotation_accepts(annotation: object, value_types: tuple[type, ...]) -> bool:
    """Return True if a parameter annotated ``annotation`` takes ``value_types``.

    Unannotated parameters accept anything.
    """
    if annotation is inspect.Parameter.empty or annotation is typing.Any:
        return True
    if isinstance(annotation, str):
        names = {part.strip().rsplit(".", 1)[-1] for part in annotation.split("|")}
        accepted = {value_type.__name__ for value_type in value_types}
        return bool(names & (accepted | {"Any", "object"}))

    if isinstance(annotation, types.UnionType) or (
        typing.get_origin(annotation) is typing.Union
    ):
        members = typing.get_args(annotation)
    else:
        members = (annotation,)
    return any(
        isinstance(member, type) and issubclass(value_type, member)
        for member in members
        for value_type in value_types
    )


def _constructor_accepts(
    provider_type: type, argument_types: tuple[tuple[type, ...], ...]
) -> bool:
    signature = _signature(provider_type)
    if signature is None:
        return False
    try:
        signature.bind(*([None] * len(argument_types)))
    except TypeError:
        return False
    annotations = _positional_annotations(signature, len(argument_types))
    return all(
        _annotation_accepts(annotation, value_types)
        for annotation, value_types in zip(annotations, argument_types, strict=True)
    )


def _has_factory_method(provider_type: type) -> bool:
    factory = inspect.getattr_static(provider_type, FACTORY_METHOD_NAME, None)
    if not isinstance(factory, staticmethod | classmethod):
        return False
    try:
        inspect.signature(getattr(provider_type, FACTORY_METHOD_NAME)).bind()
    except (TypeError, ValueError):
        return False
    return True


def supports_strategy(provider_type: type, strategy: ConstructionStrategy) -> bool:
    """Return True if ``provider_type`` can be built with ``strategy``."""
    if strategy is ConstructionStrategy.GET_INSTANCE:
        return _has_factory_method(provider_type)
    return _constructor_accepts(provider_type, _ARGUMENT_TYPES[strategy])


def detect_construction_strategy(provider_type: type) -> ConstructionStrategy | None:
    """Find the first supported construction strategy, in priority order.

    The order is: zero-argument constructor, constructor taking the
    configuration, constructor taking ``(endpoint_uri, configuration)``, and
    finally a static ``get_instance()`` factory method. A constructor only
    matches if its annotated parameters accept the values passed to them, so a
    constructor taking some other single argument falls through to
    ``get_instance()``.

    Returns:
        The selected strategy, or None if the type supports none of them.
    """
    for strategy in ConstructionStrategy:
        if supports_strategy(provider_type, strategy):
            return strategy
    return None


def validate_provider_type(provider_type: object, name: str) -> type:
    """Check that ``provider_type`` is a concrete credentials provider type.

    Raises:
        ConfigurationTypeError: If it is not a provider type, or is abstract
            or a protocol.
    """
    if not isinstance(provider_type, type) or not is_credentials_provider_type(
        provider_type
    ):
        raise ConfigurationTypeError(
            f"class {name} {NOT_CREDENTIALS_PROVIDER}", name
        )
    if inspect.isabstract(provider_type) or getattr(
        provider_type, "_is_protocol", False
    ):
        raise ConfigurationTypeError(
            f"class {name} {ABSTRACT_CREDENTIALS_PROVIDER}", name
        )
    return provider_type


def load_provider_type(name: str) -> object:
    """Import the object named by a dotted path ``package.module.Attribute``.

    Raises:
        ConfigurationTypeError: If the module or attribute cannot be found.
    """
    module_name, _, attribute = name.rpartition(".")
    if not module_name or not attribute:
        raise ConfigurationTypeError(
            f"Unknown credentials provider '{name}'", name
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationTypeError(
            f"class {name} not found: {e}", name
        ) from e
    try:
        return getattr(module, attribute)
    except AttributeError as e:
        raise ConfigurationTypeError(
            f"class {name} not found in module {module_name}", name
        ) from e


@dataclass(frozen=True)
class RegisteredProvider:
    """A validated provider type and the strategy used to construct it."""

    name: str
    provider_type: type
    strategy: ConstructionStrategy

    def create(
        self, endpoint_uri: URL, configuration: Configuration
    ) -> CredentialsProvider:
        """Instantiate the provider using the registered strategy.

        Raises:
            InstantiationError: If construction raises, or the factory method
                returns something that is not a credentials provider.
        """
        logger.debug(
            "CREDENTIALS_PROVIDER_INSTANTIATING",
            provider=self.name,
            strategy=self.strategy.value,
        )
        try:
            if self.strategy is ConstructionStrategy.NO_ARGS:
                provider = self.provider_type()
            elif self.strategy is ConstructionStrategy.CONFIGURATION:
                provider = self.provider_type(configuration)
            elif self.strategy is ConstructionStrategy.URI_AND_CONFIGURATION:
                provider = self.provider_type(endpoint_uri, configuration)
            else:
                provider = getattr(self.provider_type, FACTORY_METHOD_NAME)()
        except Exception as e:
            raise InstantiationError(
                f"{self.name} {INSTANTIATION_EXCEPTION}: {e!r}", self.name
            ) from e

        if not is_credentials_provider(provider):
            raise InstantiationError(
                f"{self.name} {INSTANTIATION_EXCEPTION}: "
                f"{FACTORY_METHOD_NAME}() returned {type(provider).__name__}, "
                "which is not a cos credential provider",
                self.name,
            )
        return provider


class ProviderRegistry:
    """Registry mapping provider names to validated provider types."""

    def __init__(self) -> None:
        self._providers: dict[str, RegisteredProvider] = {}
        self._lock = threading.Lock()

    def register(
        self,
        name: str,
        provider_type: type,
        strategy: ConstructionStrategy | None = None,
    ) -> RegisteredProvider:
        """Register a provider type under ``name``.

        Args:
            name: Name used to refer to the provider in configuration.
            provider_type: The provider class.
            strategy: Construction strategy. If None, it is detected from the
                type's constructor and ``get_instance`` factory method.

        Returns:
            The registry entry.

        Raises:
            ConfigurationTypeError: If the type is not a concrete provider, or
                does not support the declared strategy.
            NoConstructionStrategyError: If no strategy is declared and none
                can be detected.
        """
        validate_provider_type(provider_type, name)

        if strategy is None:
            strategy = detect_construction_strategy(provider_type)
            if strategy is None:
                raise NoConstructionStrategyError(name)
        elif not supports_strategy(provider_type, strategy):
            raise ConfigurationTypeError(
                f"class {name} does not support construction strategy "
                f"'{strategy.value}'",
                name,
            )

        entry = RegisteredProvider(name, provider_type, strategy)
        with self._lock:
            previous = self._providers.get(name)
            self._providers[name] = entry
        if previous is not None and previous.provider_type is not provider_type:
            logger.warning(
                "CREDENTIALS_PROVIDER_REPLACED",
                provider=name,
                previous=type_name(previous.provider_type),
                replacement=type_name(provider_type),
            )
        logger.debug(
            "CREDENTIALS_PROVIDER_REGISTERED", provider=name, strategy=strategy.value
        )
        return entry

    def unregister(self, name: str) -> None:
        with self._lock:
            self._providers.pop(name, None)

    def get(self, name: str) -> RegisteredProvider:
        """Look up a provider by name, importing dotted paths on first use.

        Raises:
            ConfigurationTypeError: If the name is unknown and cannot be
                imported, or names something that is not a concrete provider.
            NoConstructionStrategyError: If the imported type has no supported
                construction strategy.
        """
        with self._lock:
            entry = self._providers.get(name)
        if entry is not None:
            return entry

        if "." not in name:
            raise ConfigurationTypeError(
                f"Unknown credentials provider '{name}'. "
                f"Registered providers: {', '.join(self.names())}",
                name,
            )
        return self.register(name, load_provider_type(name))  # type: ignore[arg-type]

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._providers)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._providers
