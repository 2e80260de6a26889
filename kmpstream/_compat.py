import numba


def njit(*args, **kws):
    """Compile a kernel with ``numba.jit`` in nopython mode, releasing the GIL.

    Kernels never fall back to object mode, so independent matchers can be
    advanced from different threads.
    """
    kws.update({"nopython": True, "nogil": True})
    return numba.jit(*args, **kws)
