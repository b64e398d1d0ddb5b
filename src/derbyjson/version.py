"""Version information for derbyjson."""

__version__ = "0.2.0"
__author__ = "derbyjson contributors"
__email__ = "derbyjson@users.noreply.github.com"

# DerbyJSON format versions this package reads and writes.
SUPPORTED_SPEC_VERSIONS = ("0.2",)
