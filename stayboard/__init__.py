"""Stayboard property listing app"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("stayboard")
except PackageNotFoundError:
    __version__ = "dev"
