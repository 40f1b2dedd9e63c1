# Sphinx configuration for the knit documentation.

import os
import sys

# To find the knit package
sys.path.insert(0, os.path.abspath("../.."))

project = "Knit"
author = "The knit authors"

from knit import __version__ as version

release = version

master_doc = "index"

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.intersphinx",
    "sphinx.ext.doctest",
    "numpydoc",
]

# Fixes autosummary errors
numpydoc_show_class_members = False

autodoc_member_order = "bysource"

add_module_names = False

autodoc_typehints = "none"

# Run the examples in the knit module docstring with 'make doctest'
doctest_global_setup = "from knit import *"

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
}

html_theme = "nature"
