from __future__ import annotations
import os
from typing import List, Tuple
from jinja2 import Environment, FileSystemLoader, select_autoescape

_env = None


def _environment() -> Environment:
    global _env
    if _env is None:
        tmpl_dir = os.path.join(os.path.dirname(__file__), "templates")
        _env = Environment(
            loader=FileSystemLoader(tmpl_dir),
            autoescape=select_autoescape(),
            trim_blocks=True,
            keep_trailing_newline=True,
        )
    return _env


def render_short(counts: List[Tuple[str, int]]) -> str:
    return _environment().get_template("short.txt.j2").render(counts=counts)


def render_long(sections: List[Tuple[str, List[str]]]) -> str:
    return _environment().get_template("long.txt.j2").render(sections=sections)
