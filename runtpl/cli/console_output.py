# runtpl/cli/console_output.py
"""
Prints the inferred variable shapes of a template as a tree.
"""
from typing import Dict, Optional

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.tree import Tree

from runtpl.core.templating import UsageKind, VarUsage

_KIND_LABELS = {
    UsageKind.SIMPLE: "value",
    UsageKind.COLLECTION_OF_SIMPLE: "list of values",
    UsageKind.COLLECTION_OF_OBJECTS: "list of objects",
    UsageKind.OBJECT: "object",
}


def _add_usage_nodes(parent: Tree, name: str, usage: VarUsage) -> None:
    node = parent.add(f"[bold]{escape(name)}[/bold] [dim]({_KIND_LABELS[usage.kind]})[/dim]")
    for field_name, field_usage in usage.fields.items():
        _add_usage_nodes(node, field_name, field_usage)


def print_variable_tree(template_name: str, variables: Dict[str, VarUsage], console: Optional[RichConsole] = None) -> None:
    console = console or RichConsole()
    tree = Tree(f"[cyan]{escape(template_name)}[/cyan]")
    for name, usage in variables.items():
        _add_usage_nodes(tree, name, usage)
    console.print(tree)
