"""Text helpers.

Currently only hosts the filename sanitizer used to derive output file stems
from chat prompts.
"""
