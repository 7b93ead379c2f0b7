"""
mcore.py

    Engine backed by a Manticore state, so values marked from a hook can
    later be solved and fed back through the assignment decoder.

"""
import logging

from manticore import issymbolic
from manticore.core.smtlib import operators

import pychef.consts as consts
from pychef.engine import Engine
from pychef.layout import Layout


class ManticoreEngine(Engine):
    """
    engine backed by a Manticore state. Tracked buffers become labelled
    symbolic buffers; the concrete content is kept aside since Manticore
    has no native concolic mode.
    """

    def __init__(self, state, max_symbolic_size=consts.MAX_SYMBOLIC_SIZE, layout=None):
        """
        :param state: manticore State the values are registered in
        :param max_symbolic_size: ceiling for dict and tuple sizes
        :param layout: Layout the session packs tracked buffers with
        """
        super().__init__()
        self.state = state
        self.max_symbolic_size = max_symbolic_size
        self.layout = layout or Layout.native()

        # label -> (name, symbolic buffer, concrete bytes)
        self.tracked = {}

    def is_active(self):
        return self.state is not None

    def get_configured_max_size(self):
        return self.max_symbolic_size

    def track_buffer(self, buf, name):
        # '#' is not a legal SMT-LIB symbol character, so the solver only
        # sees a generated label and the real name is kept here
        label = f"pychef_{len(self.tracked)}"
        logging.debug(f"Tracking {len(buf)} bytes as {name} ({label})")

        symbolic = self.state.new_symbolic_buffer(len(buf), label=label)
        self.tracked[label] = (name, symbolic, bytes(buf))
        return symbolic

    def assume(self, constraint):
        self.state.constrain(constraint.apply(self.as_integer(constraint.symbol)))

    def as_integer(self, symbolic):
        """ read a tracked buffer as one signed integer in the layout byte order """
        if not issymbolic(symbolic):
            return int.from_bytes(bytes(symbolic), self.layout.byteorder, signed=True)

        # CONCAT takes the most significant byte first
        size = len(symbolic)
        octets = [symbolic[i] for i in range(size)]
        if self.layout.byteorder == "little":
            octets.reverse()
        return operators.CONCAT(size * 8, *octets)

    def concrete_content(self, label):
        return self.tracked[label][2]

    def assignments(self):
        """
        solve every tracked buffer in the current state

        :rtype: iterator of (name, bytes) pairs
        """
        for name, symbolic, _ in self.tracked.values():
            solution = self.state.solve_one(symbolic)
            logging.debug(f"Solved {name}: {solution!r}")
            yield name, bytes(solution)
