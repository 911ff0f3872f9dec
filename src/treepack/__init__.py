"""
treepack - Directory tree text aggregator.

Walks a project directory, filters excluded paths and concatenates the text
of the remaining files into a single artifact for LLM prompts.
"""

__version__ = "0.2.0"
