"""git-x: safety-guarded branch and bisect operations on top of git."""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    __version__ = get_version("git-x")
except PackageNotFoundError:
    __version__ = "dev"
