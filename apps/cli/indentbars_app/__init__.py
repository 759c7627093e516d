"""Command line tools for indentation bars."""
