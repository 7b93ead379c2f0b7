"""
engine.py

    Interface to the symbolic execution engine. The marshaling layer
    only ever needs to know whether the engine is running, to track a
    buffer under a name, to add an assumption and to read the
    configured ceiling for structural sizes.

"""
import contextlib

import pychef.consts as consts


class Engine:
    """
    base engine. Subclasses override the four hypercalls; atomic region
    bookkeeping is shared so repeated enter/exit calls are harmless.
    """

    def __init__(self):
        self._atomic_depth = 0

    def is_active(self):
        raise NotImplementedError

    def track_buffer(self, buf, name):
        """
        mark `buf` as concolic under `name`, keeping its current content.
        The engine may write the content it yields back into `buf`.

        :param buf: bytearray owned by the caller for the whole call
        :param name: encoded symbolic name
        :return: engine symbol usable in a Constraint
        """
        raise NotImplementedError

    def assume(self, constraint):
        raise NotImplementedError

    def get_configured_max_size(self):
        return consts.MAX_SYMBOLIC_SIZE

    def begin_atomic(self):
        self._atomic_depth += 1
        if self._atomic_depth == 1:
            self._enter_atomic()

    def end_atomic(self):
        if self._atomic_depth == 0:
            return
        self._atomic_depth -= 1
        if self._atomic_depth == 0:
            self._exit_atomic()

    def _enter_atomic(self):
        pass

    def _exit_atomic(self):
        pass

    @contextlib.contextmanager
    def atomic(self):
        """ keep the engine from interleaving other paths inside the block """
        self.begin_atomic()
        try:
            yield self
        finally:
            self.end_atomic()


class InactiveEngine(Engine):
    """ stand-in used when the program runs outside the engine """

    def is_active(self):
        return False

    def track_buffer(self, buf, name):
        raise RuntimeError("Cannot track buffers outside symbolic mode")

    def assume(self, constraint):
        raise RuntimeError("Cannot add assumptions outside symbolic mode")
