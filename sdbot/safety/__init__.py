"""Safety package.

Holds the lexical bad-word gate consulted by the image pipeline before a
prompt is forwarded to the generation service.
"""
