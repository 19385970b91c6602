"""Input loading, interactive prompting and durable output writing."""

from .loader import load_request, parse_request
from .prompt import prompt_request
from .writer import resolve_out_path, write_atomic, write_text_atomic

__all__ = [
    "load_request",
    "parse_request",
    "prompt_request",
    "resolve_out_path",
    "write_atomic",
    "write_text_atomic",
]
