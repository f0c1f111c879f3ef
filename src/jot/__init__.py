"""jot: capture thoughts and journal entries as Markdown files with YAML frontmatter."""

__version__ = "0.1.0"
