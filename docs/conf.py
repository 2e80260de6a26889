# -*- coding: utf-8 -*-

project = "kmpstream"
copyright = "2026, kmpstream contributors"
author = "kmpstream contributors"

extensions = ["numpydoc", "sphinxcontrib.apidoc"]

apidoc_module_dir = "../kmpstream"
apidoc_output_dir = "api"
apidoc_separate_modules = True
apidoc_extra_args = ["--implicit-namespaces"]

templates_path = ["_templates"]
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]
html_theme = "sphinx_rtd_theme"
html_static_path = ["_static"]
