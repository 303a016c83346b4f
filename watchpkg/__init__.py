"""watchpkg - run scripts when packages change."""

__version__ = "1.0.1"
