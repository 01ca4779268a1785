"""entitytags - bulk maintenance of cloud resource entity tags."""

from entitytags.__version__ import __version__

__all__ = ["__version__"]
