"""Repeat text back to the operator."""

aliases = ["e", "say"]
help = "Repeat the given text. Usage: echo <text>"


def run(context, message, args):
    return " ".join(args)
