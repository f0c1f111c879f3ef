"""
Document subsystem.

Components:
- frontmatter.py: header/body split and typed YAML header codec
- model.py: Meta, Document variants (Thought, JournalEntry), factories, mutate()
- editor.py: transform that runs the user's $EDITOR on a file
"""
