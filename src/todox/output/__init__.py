"""Reporters — Rich terminal, canonical JSON, Markdown, SARIF and GitHub annotations."""
