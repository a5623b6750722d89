"""CLI commands for global configuration management."""

from typing import Optional

import typer

from vibe import global_config
from vibe.config import (
    API_KEY_ENV_VARS,
    AVAILABLE_MODELS,
    GITHUB_TOKEN_ENV_VAR,
    LLMProvider,
)
from vibe.cli.utils import fail, load_settings_or_exit

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage global vibe configuration in ~/.vibe/",
    add_completion=False,
)

VALID_PROVIDERS = ", ".join(p.value for p in LLMProvider)


def _mask(secret: Optional[str]) -> str:
    if not secret:
        return "not set"
    return secret[:8] + "..." + secret[-4:] if len(secret) > 12 else "***"


def _parse_provider(name: str) -> LLMProvider:
    try:
        return LLMProvider(name.lower())
    except ValueError:
        fail(f"Invalid provider: {name}\nValid providers: {VALID_PROVIDERS}")


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration."""
    settings = load_settings_or_exit()

    typer.echo("Current vibe configuration:")
    typer.echo()
    typer.echo(f"  Provider: {settings.provider.value}")
    typer.echo(f"  Model: {settings.model}")
    typer.echo(f"  Temperature: {settings.temperature}")
    typer.echo(f"  Max diff chars: {settings.max_diff_chars}")
    typer.echo(f"  Request timeout: {settings.request_timeout}s")
    if settings.editor:
        typer.echo(f"  Editor: {settings.editor}")
    if not global_config.is_configured():
        typer.echo()
        typer.echo("  No ~/.vibe/config.yaml yet, using defaults.")
        typer.echo("  Run 'vibe config set-provider <name>' to choose a provider.")
    typer.echo()

    try:
        for env_var in (settings.api_key_env_var, GITHUB_TOKEN_ENV_VAR):
            typer.echo(f"  {env_var}: {_mask(global_config.get_credential(env_var))}")
    except global_config.GlobalConfigError as e:
        fail(str(e))


@config_app.command("set-key")
def config_set_key(
    name: str = typer.Argument(
        ...,
        help=f"Provider name ({VALID_PROVIDERS}) or 'github' for the GitHub token",
    ),
) -> None:
    """Store an API key or the GitHub token in ~/.vibe/credentials."""
    if name.lower() == "github":
        env_var = GITHUB_TOKEN_ENV_VAR
        label = "GitHub token"
    else:
        provider = _parse_provider(name)
        env_var = API_KEY_ENV_VARS[provider]
        label = f"{provider.value} API key"

    secret = typer.prompt(f"Enter your {label}", hide_input=True)

    try:
        global_config.save_credential(env_var, secret.strip())
    except global_config.GlobalConfigError as e:
        fail(str(e))

    typer.echo(f"✓ {label} saved to ~/.vibe/credentials")


@config_app.command("set-provider")
def config_set_provider(
    provider: str = typer.Argument(..., help=f"Provider name ({VALID_PROVIDERS})"),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Model name (default: the provider's first listed model)",
    ),
) -> None:
    """Set the active LLM provider and model."""
    llm_provider = _parse_provider(provider)
    models = AVAILABLE_MODELS[llm_provider]
    model = model or models[0]

    if model not in models:
        typer.echo(f"Warning: '{model}' is not a known {llm_provider.value} model.", err=True)

    try:
        global_config.set_provider_and_model(llm_provider, model)
    except global_config.GlobalConfigError as e:
        fail(str(e))

    typer.echo(f"✓ Provider set to {llm_provider.value}, model {model}")
