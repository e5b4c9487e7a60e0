"""
Connection context commands.
"""

from __future__ import annotations

from snowflow.cli.ux import console, info, print_table, success
from snowflow.config.contexts import ConfigContext, ContextStore
from snowflow.core.errors import main_with_error_handling


@main_with_error_handling()
def add_context_command(
    url: str,
    api_token: str,
    name: str = "",
    config_path: str | None = None,
) -> int:
    """Add or replace a context and make it current."""
    store = ContextStore(config_path)
    context = store.upsert(ConfigContext(url=url, name=name, api_token=api_token))
    success(f"Context {context.selector} saved and selected")
    return 0


@main_with_error_handling()
def use_context_command(selector: str, config_path: str | None = None) -> int:
    store = ContextStore(config_path)
    context = store.use(selector)
    success(f"Switched to context {context.selector}")
    return 0


@main_with_error_handling()
def list_contexts_command(config_path: str | None = None) -> int:
    store = ContextStore(config_path)
    contexts = store.contexts()
    if not contexts:
        info("No contexts configured. Add one with: snowflow context add --url URL --token TOKEN")
        return 0

    current = store.current()
    rows = [
        [
            "*" if current is not None and context.selector == current.selector else "",
            context.url,
            context.name or "-",
        ]
        for context in contexts
    ]
    print_table("Contexts", ["", "URL", "Name"], rows)
    console.print()
    return 0
