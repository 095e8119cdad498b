"""Sphinx configuration for werner documentation."""

import os
import sys
from pathlib import Path

project = "werner"
copyright = "2026, werner contributors"
author = "werner contributors"
release = "0.1.0"

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.intersphinx",
    "sphinx_autodoc_typehints",
]

exclude_patterns = ["_build"]

napoleon_google_docstring = True
napoleon_numpy_docstring = False

autodoc_member_order = "bysource"
autodoc_typehints = "description"

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
    "scipy": ("https://docs.scipy.org/doc/scipy/", None),
    "matplotlib": ("https://matplotlib.org/stable/", None),
}

html_theme = "sphinx_rtd_theme"

_STATIC = Path(__file__).resolve().parent / "_static"


def _generate_gallery(app):
    """Render the polyhedra gallery images used by the docs pages."""
    if os.environ.get("SKIP_IMAGE_GEN"):
        return
    sys.path.insert(0, str(_STATIC))
    try:
        from generate_images import generate_docs_images
    finally:
        sys.path.pop(0)
    generate_docs_images()


def setup(app):
    app.connect("builder-inited", _generate_gallery)
