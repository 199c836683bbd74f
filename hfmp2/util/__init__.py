from hfmp2.util import types, log, decor, linalg
from hfmp2.util.time import Timer
from hfmp2.util.decor import record_time, record_energy
from hfmp2.util.linalg import einsum, outer_sum, sparsity
