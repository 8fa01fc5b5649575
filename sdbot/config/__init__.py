"""Configuration package.

Module split:
    - `settings`: environment-driven defaults and entrypoint logging setup.
    - `runtime`: the mutable `RuntimeConfig` consulted by the image pipeline and
      changed by `sd set` admin commands.
"""
