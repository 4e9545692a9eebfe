"""Shared CLI options."""

from __future__ import annotations

import typer

from release_view.config.settings import settings

OutputOption = typer.Option(settings.default_output, "--output", "-o", help="Output format: table, json, yaml")
NamespaceOption = typer.Option("default", "--namespace", "-n", help="Kubernetes namespace")
ContextOption = typer.Option(None, "--context", help="Kubernetes context name")
ValuesOption = typer.Option(None, "--values", "-f", help="YAML file with values for the release")
