''' Linear algebra and extensions to numpy.
'''

import numpy as np
import functools


''' Wrapper for einsum: clear up `optimize` keyword inconsistencies
    between different versions of numpy.
'''

numpy_einsum = functools.partial(np.einsum, casting='safe',
                                 order='C', optimize=True)

einsum = numpy_einsum


def apply_outer(vectors, operator):
    ''' Applies an operation (function) to a set of vectors along new
        axes. Output shape is according to the sizes of the vectors in
        order.

    Parameters
    ----------
    vectors : (n,m) array
        list of vectors to apply operation to
    operator : callable
        function to apply pairwise

    Returns
    -------
    array : (m,) * n ndarray
        array with operation applied pairwise
    '''

    assert all([x.ndim == 1 for x in vectors])

    array = np.copy(vectors[0])

    for i in range(1, len(vectors)):
        v_idx = ((None,) * array.ndim) + (slice(None),)
        array = array[...,None]
        array = operator(array, vectors[i][v_idx])

    return array


def outer_sum(vectors):
    ''' Performs a sum of a set of vectors, each time along a new
        axis.

    Parameters
    ----------
    vectors : (n,m) array
        any number of vectors

    Returns
    -------
    array : (m,) * n ndarray
        array containing outer-summed vectors
    '''

    return apply_outer(vectors, np.add)


def sparsity(array, tol=1e-14):
    ''' Returns the sparsity value of a matrix, higher value means
        more zero elements.

    Parameters
    ----------
    array : array
        input array
    tol : float, optional
        elements with an absolute value below this are assumed zero

    Returns
    -------
    val : float
        sparsity value
    '''

    if array.size == 0:
        return 0.0

    mask = np.absolute(array) < tol

    return np.sum(mask) / array.size
