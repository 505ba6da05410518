"""Command-line interface and main entry point.

This module provides the CLI for inspecting credentials resolution: building
the provider chain for an endpoint from a configuration file and reporting
which provider supplied credentials.
"""
# ruff: noqa: T201

import sys

import structlog

from cosn_app.cli_config import create_providers_config, create_resolve_config
from cosn_app.observability import configure_logging, log_bind
from cosn_core.configuration import Configuration
from cosn_core.constants import COSN_CREDENTIALS_PROVIDER
from cosn_core.credentials import (
    create_credentials_provider_chain,
    list_credentials_providers,
)
from cosn_core.exceptions import CosNError, NoCredentialsError

__version__ = "0.1.0"

# Get logger for this module
logger = structlog.get_logger(__name__)

_VISIBLE_KEY_CHARS = 4


def mask_secret(value: str) -> str:
    """Mask all but the first few characters of a secret identifier."""
    if len(value) <= _VISIBLE_KEY_CHARS:
        return "*" * len(value)
    return value[:_VISIBLE_KEY_CHARS] + "*" * (len(value) - _VISIBLE_KEY_CHARS)


def resolve_command(args: list[str] | None = None) -> None:
    """Resolve credentials for an endpoint and report the result.

    Args:
        args: Command line arguments; the first is the endpoint URI.
    """
    if not args:
        print("Error: endpoint_uri is required")
        sys.exit(1)
    if args[0].startswith("--"):
        print(
            f"Error: endpoint_uri is required before options, got '{args[0]}'. "
            "Usage: cosn-credentials resolve <endpoint_uri> [options]"
        )
        sys.exit(1)

    try:
        config = create_resolve_config(args[0], args[1:])
        configure_logging(log_level=config.log_level, dev_mode=config.dev_mode)

        configuration = (
            Configuration.from_yaml(config.config_file)
            if config.config_file
            else Configuration()
        )
        if config.providers is not None:
            configuration.set(COSN_CREDENTIALS_PROVIDER, config.providers)

        with log_bind(endpoint=config.endpoint_uri):
            chain = create_credentials_provider_chain(
                config.endpoint_uri, configuration
            )
            logger.info("CREDENTIALS_CHAIN_READY", providers=len(chain))
            credentials = chain.resolve()

        print(f"Endpoint: {config.endpoint_uri}")
        print(
            "Providers: "
            + ", ".join(type(provider).__name__ for provider in chain.providers)
        )
        print(f"Access key id: {mask_secret(credentials.access_key_id)}")
        print(f"Session token: {'yes' if credentials.session_token else 'no'}")

    except NoCredentialsError as e:
        print(f"Error: {e.message}")
        for provider_name, reason in e.reasons:
            print(f"  {provider_name}: {reason}")
        sys.exit(1)
    except (CosNError, ValueError) as e:
        print(f"Error: {e!s}")
        sys.exit(1)


def providers_command(args: list[str] | None = None) -> None:
    """List all registered credentials providers.

    Args:
        args: Command line arguments.
    """
    try:
        config = create_providers_config(args)
        configure_logging(log_level=config.log_level, dev_mode=config.dev_mode)
    except ValueError as e:
        print(f"Error: {e!s}")
        sys.exit(1)

    providers = list_credentials_providers()
    print("Registered credentials providers:")
    for name in providers:
        print(f"  {name}")
    print(f"Total: {len(providers)} provider(s)")


def show_help() -> None:
    """Show help information for the CLI."""
    help_text = """
COS credentials resolution

Usage:
    cosn-credentials <command> [options]

Commands:
    resolve <endpoint_uri>  Build the provider chain and resolve credentials
    providers               List registered credentials providers
    --help, -h              Show this help message
    --version, -v           Show version information

Options for resolve command:
    --config-file <path>    YAML file holding fs.cosn.* configuration
    --providers <names>     Comma-separated providers, overriding the file
    --log-level <level>     Log level (DEBUG, INFO, WARNING, ERROR)
    --dev-mode              Enable development mode logging

Examples:
    cosn-credentials resolve cosn://examplebucket-1250000000
    cosn-credentials resolve cosn://bucket --config-file core-site.yaml
    cosn-credentials resolve cosn://bucket --providers environment,simple
    cosn-credentials providers
"""
    print(help_text)


def main() -> None:
    """Main entry point for the CLI."""
    min_args = 2
    if len(sys.argv) < min_args:
        show_help()
        sys.exit(1)

    command = sys.argv[1]
    args = sys.argv[2:]

    if command == "resolve":
        if not args:
            show_help()
            sys.exit(1)
        resolve_command(args)
    elif command == "providers":
        providers_command(args)
    elif command in ["--help", "-h", "help"]:
        show_help()
        sys.exit(0)
    elif command in ["--version", "-v", "version"]:
        print(f"cosn-credentials, version {__version__}")
        sys.exit(0)
    else:
        show_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
