import warnings
warnings.simplefilter('ignore', FutureWarning)

from . import util, eri, energy, ints, mp

__all__ = ['util', 'eri', 'energy', 'ints', 'mp']
