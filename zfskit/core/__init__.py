"""Command execution, output decoding and property typing."""
