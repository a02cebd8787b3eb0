"""
CLI utilities for command line reconstruction and introspection.
"""

from pathlib import Path

import click

PROGRAM_NAME = "case_iterable"


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        # No active context, return basic command
        return PROGRAM_NAME

    if not cli_args:
        return PROGRAM_NAME

    cmd_parts = [PROGRAM_NAME]

    arguments = []  # For positional arguments
    options = []  # For optional arguments

    for param in click_command.params:
        param_name = param.name
        if param_name not in cli_args:
            continue

        value = cli_args[param_name]

        # Skip if it's the default value
        if isinstance(param, click.Option) and value == param.default:
            continue

        if isinstance(param, click.Option) and param.is_flag:
            # --format/--no-format: the secondary spelling records False
            if value:
                options.append(param.opts[0])
            elif param.secondary_opts:
                options.append(param.secondary_opts[0])
            continue

        if not value:
            continue

        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            # File paths shown as file names for cleaner display
            if isinstance(item, (str, Path)):
                path_obj = Path(str(item))
                formatted_value = path_obj.name if path_obj.exists() else str(item)
            else:
                formatted_value = str(item)

            if isinstance(param, click.Argument):
                arguments.append(formatted_value)
            elif isinstance(param, click.Option):
                flag = param.opts[0] if param.opts else f"--{param_name}"
                options.extend([flag, formatted_value])

    cmd_parts.extend(arguments)
    cmd_parts.extend(options)

    return " ".join(cmd_parts)
