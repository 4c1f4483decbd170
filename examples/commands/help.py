"""List commands, or show the help text of one command."""

aliases = ["h", "?"]
help = "Show available commands. Usage: help [command]"


def run(context, message, args):
    registry = context.registry
    prefix = context.prefix

    if args and args[0]:
        descriptor = registry.resolve(args[0])
        if descriptor is None:
            raise LookupError(f"No such command: {args[0]}")
        lines = [f"{prefix}{descriptor.name}: {descriptor.help}"]
        if descriptor.aliases:
            lines.append("Aliases: " + ", ".join(descriptor.aliases))
        return "\n".join(lines)

    lines = []
    for descriptor in registry.list_commands():
        names = ", ".join(prefix + name for name in descriptor.names)
        lines.append(f"{names} - {descriptor.help}")
    return "\n".join(lines)
