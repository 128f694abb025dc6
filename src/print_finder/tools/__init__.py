"""Source adapters: one async search function per upstream site."""

from print_finder.tools.makerworld_search import makerworld_search
from print_finder.tools.printables_search import printables_search
from print_finder.tools.thingiverse_search import thingiverse_search

__all__ = [
    "makerworld_search",
    "printables_search",
    "thingiverse_search",
]
