"""CLI configuration using environ-config.

This module defines the configuration classes for command-line arguments.
Every option can be given as an environment variable with the ``COSN_APP_``
prefix or as a ``--kebab-case`` flag, flags taking precedence.
"""

import os
from collections.abc import Mapping
from typing import TypeVar

import environ

ENV_PREFIX = "COSN_APP"

T = TypeVar("T")


@environ.config(prefix=ENV_PREFIX)
class ResolveConfig:
    """Configuration for the resolve command."""

    endpoint_uri: str = environ.var(help="Storage endpoint URI, e.g. cosn://bucket")
    config_file: str | None = environ.var(
        default=None, help="YAML file holding the fs.cosn.* configuration"
    )
    providers: str | None = environ.var(
        default=None,
        help="Comma-separated credentials providers, overriding the config file",
    )
    log_level: str = environ.var(default="INFO", help="Log level")
    dev_mode: bool = environ.bool_var(
        default=False, help="Enable development mode logging"
    )


@environ.config(prefix=ENV_PREFIX)
class ProvidersConfig:
    """Configuration for the providers command."""

    log_level: str = environ.var(default="INFO", help="Log level")
    dev_mode: bool = environ.bool_var(
        default=False, help="Enable development mode logging"
    )


def parse_flags(args: list[str]) -> dict[str, str]:
    """Turn ``--kebab-case value`` flags into ``COSN_APP_SNAKE_CASE`` variables.

    A flag that is not followed by a value is treated as a boolean switch.

    Raises:
        ValueError: If an argument is not a ``--`` flag.
    """
    parsed: dict[str, str] = {}
    index = 0
    while index < len(args):
        arg = args[index]
        if not arg.startswith("--") or arg == "--":
            raise ValueError(f"Unexpected argument: {arg}")  # noqa: TRY003

        name, _, inline_value = arg[2:].partition("=")
        env_name = f"{ENV_PREFIX}_{name.replace('-', '_').upper()}"
        if inline_value:
            parsed[env_name] = inline_value
            index += 1
        elif index + 1 < len(args) and not args[index + 1].startswith("--"):
            parsed[env_name] = args[index + 1]
            index += 2
        else:
            parsed[env_name] = "true"
            index += 1
    return parsed


def args_to_config_class(
    config_class: type[T],
    args: list[str] | None = None,
    overrides: Mapping[str, str] | None = None,
) -> T:
    """Build a config class from the environment and command line flags."""
    env = dict(os.environ)
    env.update(parse_flags(args or []))
    if overrides:
        env.update(overrides)
    return environ.to_config(config_class, environ=env)


def create_resolve_config(
    endpoint_uri: str, args: list[str] | None = None
) -> ResolveConfig:
    """Create a ResolveConfig from command line arguments and environment variables.

    Args:
        endpoint_uri: The positional endpoint URI argument.
        args: Remaining command line arguments.

    Returns:
        ResolveConfig instance populated from args and environment variables.
    """
    return args_to_config_class(
        ResolveConfig, args, {f"{ENV_PREFIX}_ENDPOINT_URI": endpoint_uri}
    )


def create_providers_config(args: list[str] | None = None) -> ProvidersConfig:
    """Create a ProvidersConfig from command line arguments and environment variables."""
    return args_to_config_class(ProvidersConfig, args)
