"""Command-line interface for ask-ai."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click
import yaml

from .config import CONFIG_FILENAME, AppConfig, Provider, load_config, save_config
from .conversation import ConversationRequest
from .dispatch import ask as ask_question
from .errors import AskAIError, ConfigError
from .logging import get_logger, setup_logging
from .secrets import EnvSecretProvider

PROVIDER_CHOICES = [provider.value for provider in Provider]

logger = get_logger("cli")


def _load_history(path: Path) -> list[dict[str, Any]]:
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8")) or []
    except yaml.YAMLError as exc:
        raise click.BadParameter(f"Invalid YAML in {path}: {exc}", param_hint="--history-file") from exc
    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        raise click.BadParameter(
            "History must be a list of {user, assistant} mappings.", param_hint="--history-file"
        )
    return payload


def _load_or_exit() -> AppConfig:
    try:
        return load_config()
    except ConfigError as exc:
        click.echo(f"Error loading configuration: {exc}", err=True)
        sys.exit(1)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v for INFO, -vv for DEBUG)")
@click.option("-q", "--quiet", is_flag=True, help="Suppress all output except errors")
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: bool) -> None:
    """ask-ai sends a prompt to OpenAI, Anthropic or a local Ollama model."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    try:
        log_level = load_config().log_level
    except ConfigError:
        log_level = "INFO"

    setup_logging(level=log_level, verbose=verbose, quiet=quiet)


@cli.command()
@click.argument("prompt", default="")
@click.option("--provider", type=click.Choice(PROVIDER_CHOICES), help="Override the configured provider.")
@click.option("--model", help="Override the configured model.")
@click.option("--system", "system_prompt", help="System prompt sent before the conversation.")
@click.option("--max-tokens", type=click.IntRange(min=0), help="Response token limit (Anthropic only).")
@click.option(
    "--history-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML list of earlier turns, each with 'user' and 'assistant' keys.",
)
def ask(
    prompt: str,
    provider: str | None,
    model: str | None,
    system_prompt: str | None,
    max_tokens: int | None,
    history_file: Path | None,
) -> None:
    """Ask a single question and print the answer."""
    cfg = _load_or_exit()
    if provider and provider != cfg.provider and not model:
        # The configured model belongs to the configured provider.
        raise click.UsageError(
            f"--model is required when --provider ({provider}) differs from the configured "
            f"provider ({cfg.provider})."
        )
    data = dict(cfg.raw) if cfg.raw else {"provider": cfg.provider, "model": cfg.model}
    if provider:
        data["provider"] = provider
    if model:
        data["model"] = model
    if max_tokens is not None:
        data["max_tokens"] = max_tokens

    try:
        provider_config = AppConfig.from_dict(data).provider_config
    except ConfigError as exc:
        click.echo(f"Error loading configuration: {exc}", err=True)
        sys.exit(1)

    turns = _load_history(history_file) if history_file else []
    request = ConversationRequest.from_history(prompt, turns, system_prompt=system_prompt)

    logger.debug("Asking %s (%s)", provider_config.provider, provider_config.model)
    try:
        answer = ask_question(provider_config, request)
    except AskAIError as exc:
        click.echo(str(exc), err=True)
        sys.exit(1)
    click.echo(answer)


@cli.command()
@click.option("--provider", type=click.Choice(PROVIDER_CHOICES), default="ollama", show_default=True)
@click.option("--model", default="llama3", show_default=True)
@click.option("--max-tokens", type=click.IntRange(min=0), default=None)
def setup(provider: str, model: str, max_tokens: int | None) -> None:
    """Write a baseline .askai.yml configuration."""
    config_path = Path(CONFIG_FILENAME)
    if config_path.exists() and not click.confirm(f"{CONFIG_FILENAME} exists. Overwrite?", default=False):
        click.echo("Aborted.")
        return

    data = {
        "provider": provider,
        "model": model,
        "max_tokens": max_tokens,
    }
    save_config(AppConfig.from_dict(data))
    click.echo(f"Saved configuration to {config_path}")


@cli.command()
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text")
def config(output_format: str) -> None:
    """Show current ask-ai configuration."""
    cfg = _load_or_exit()

    if output_format == "json":
        click.echo(json.dumps(cfg.raw or AppConfig.from_dict({}).raw, indent=2))
    else:
        click.echo("ask-ai Configuration:")
        click.echo(f"  Provider:   {cfg.provider}")
        click.echo(f"  Model:      {cfg.model}")
        click.echo(f"  Max Tokens: {cfg.max_tokens if cfg.max_tokens is not None else 'default'}")
        click.echo(f"  Timeout:    {cfg.timeout if cfg.timeout is not None else 'none'}")
        click.echo(f"  Log Level:  {cfg.log_level}")


@cli.command()
def validate() -> None:
    """Validate ask-ai configuration and environment."""
    warnings = []

    try:
        cfg = load_config()
        click.echo("✓ Configuration file loaded successfully")
    except ConfigError as exc:
        click.echo(f"✗ Configuration error: {exc}", err=True)
        sys.exit(1)

    secrets = EnvSecretProvider()
    provider = Provider.parse(cfg.provider)
    if provider is Provider.OLLAMA:
        click.echo("✓ Using Ollama (local, no API key needed)")
    else:
        key_name = f"{provider.value.upper()}_API_KEY"
        if secrets.get(key_name):
            click.echo(f"✓ {key_name} is set")
        else:
            warnings.append(f"{key_name} not set")
            click.echo(f"⚠ {key_name} not set", err=True)
        url_name = f"{provider.value.upper()}_API_URL"
        if secrets.get(url_name):
            click.echo(f"✓ Endpoint overridden by {url_name}")

    click.echo("\n" + "=" * 50)
    if warnings:
        click.echo(f"Validation passed with {len(warnings)} warning(s)")
    else:
        click.echo("✓ All validations passed")


def main() -> None:
    """Console script entry point."""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        sys.exit(1)


if __name__ == "__main__":
    main()
