"""Offline generator for parental exit authorizations.

The package turns an :class:`~autorisation.form.model.AuthorizationRequest`
into a Markdown document and/or a PDF.  The command line interface lives in
:mod:`autorisation.cli`.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
