# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Project information -----------------------------------------------------

project = 'symunits'
copyright = '2025, Parneet Sidhu'
author = 'Parneet Sidhu'
html_title = 'symunits Docs'

# -- General configuration ---------------------------------------------------

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.viewcode',
    'sphinx_copybutton',
    "myst_parser"
]

exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']

# Render signatures as `Units(value, unit)` rather than fully qualified.
add_module_names = False
autodoc_member_order = "bysource"

# -- Options for HTML output -------------------------------------------------

html_theme = "furo"

html_theme_options = {
    "sidebar_hide_name": False,
    "navigation_with_keys": True,
}

source_suffix = {
    ".rst": "restructuredtext",
    ".md": "markdown",
}
