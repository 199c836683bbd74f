import time


class Timer:
    ''' Stopwatch used to time the stages of a calculation. Each call
        returns the time since the previous call.
    '''

    def __init__(self):
        self.time_init = time.perf_counter()
        self.time_prev = self.time_init

    def lap(self):
        time_curr = time.perf_counter()
        time_diff = time_curr - self.time_prev

        self.time_prev = time_curr

        return time_diff

    def total(self):
        return time.perf_counter() - self.time_init

    def format_total(self):
        t = self.total()
        return '%d min %.4f s' % (t // 60, t % 60)

    def __call__(self):
        return self.lap()
