"""newtkit

Low-level helpers for build and package-management command-line tools:
verbosity-aware messages, filesystem probing, directory-tree searches, shell
and interactive command execution, manifest-style line reading, and YAML
configuration loading.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
