"""print-finder: aggregated search for 3D-printable models."""

from print_finder.consts import API_VERSION

__version__ = API_VERSION
