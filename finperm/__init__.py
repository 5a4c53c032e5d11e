from .config import Config, config, load_config
from .enumeration import (factorial, group, iter_group, random_permutation,
                          rank, unrank)
from .permutation import InvalidPermutation, Permutation, product
from .version import __version__
