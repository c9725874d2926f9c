# ABOUTME: Shared Click options for Bookmeld CLI commands.
# ABOUTME: Provides reusable decorators for common flags like --api-key.

import click

from bookmeld.config import API_KEY_ENV_VAR

api_key_option = click.option(
    "--api-key",
    default=None,
    help=f"Google Books API key (overrides ${API_KEY_ENV_VAR} and the book list).",
)
