"""
CLI Commands

Subcommand implementations for the Patricia CLI.
"""
