''' Default data types.
'''

import numpy as np


class float64(np.float64):
    memsize = 64

    @classmethod
    def nbytes(cls, n):
        return n * cls.memsize // 8


class int32(np.int32):
    memsize = 32

    @classmethod
    def nbytes(cls, n):
        return n * cls.memsize // 8


class int64(np.int64):
    memsize = 64

    @classmethod
    def nbytes(cls, n):
        return n * cls.memsize // 8
