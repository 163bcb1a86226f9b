"""propcat: property catalogs and dispatch tables from C# declaration trees."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("propcat")
except PackageNotFoundError:
    __version__ = "dev"
