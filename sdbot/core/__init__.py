"""Core command-handling package.

Composition:
    - `engine`: dispatches `sd ...` chat messages and reports outcomes.
    - `admin`: `vars` / `set` runtime-config commands.
    - `errors`: exception taxonomy shared by all layers.

Importing the package is side-effect free.
"""
