"""Configuration loading utilities.

Precedence of configuration sources:
    1. Package defaults (``defaults.yml``)
    2. Optional user-provided YAML passed to :func:`load_config`
    3. ``AUTORISATION_*`` environment variables
"""

from .schema import ConfigModel, PandocSettings, PdfSettings, load_config

__all__ = ["ConfigModel", "PandocSettings", "PdfSettings", "load_config"]
