''' Decorators for class methods.
'''

import functools


def record_time(key):
    ''' Adds the wall time of the method to cls._timings[key].
    '''

    def decorator(method):
        @functools.wraps(method)
        def wrapper(cls, *args, **kwargs):
            cls._timer()
            out = method(cls, *args, **kwargs)
            cls._timings[key] = cls._timings.get(key, 0.0) + cls._timer()
            return out
        return wrapper
    return decorator


def record_energy(key):
    ''' Appends the value returned by the method to cls._energies[key].
    '''

    def decorator(method):
        @functools.wraps(method)
        def wrapper(cls, *args, **kwargs):
            e = method(cls, *args, **kwargs)
            cls._energies[key] = cls._energies.get(key, []) + [e,]
            return e
        return wrapper
    return decorator
