"""
Rewrite rules, one module per command group.

Importing this package registers every rule with the registry in
``hubwrap.core.commands.base``.
"""

from hubwrap.core.commands import (  # noqa: F401
    am,
    browse,
    checkout,
    cherry_pick,
    clone,
    create,
    fetch,
    fork,
    init,
    meta,
    pull_request,
    push,
    remote,
)
from hubwrap.core.commands.base import (
    CUSTOM_COMMANDS,
    CommandContext,
    Rule,
    api_errors,
    get_rule,
    is_custom_command,
    list_rules,
    register_rule,
    rule_key,
)

__all__ = [
    "CUSTOM_COMMANDS",
    "CommandContext",
    "Rule",
    "api_errors",
    "get_rule",
    "is_custom_command",
    "list_rules",
    "register_rule",
    "rule_key",
]
