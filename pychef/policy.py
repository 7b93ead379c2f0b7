"""
policy.py

    Size constraint policy. A maximum size below zero marks a fixed-size
    object that gets no constraint, zero asks for a lower bound only and
    anything above zero asks for the inclusive range [min, max].

"""
import collections
import logging


class Constraint(collections.namedtuple("Constraint", "symbol operator bound")):
    """
    boolean expression `symbol <operator> bound` handed to Engine.assume().
    `symbol` is whatever the engine returned when the buffer was tracked.
    """

    __slots__ = ()

    def apply(self, value):
        """
        evaluate the expression against `value`. A concrete value gives a
        bool, an engine expression gives the boolean expression to assume.
        """
        if self.operator == ">=":
            return value >= self.bound
        if self.operator == "<=":
            return value <= self.bound
        if self.operator == "<":
            return value < self.bound
        raise ValueError(f"Unknown constraint operator {self.operator!r}")


def check(size, max_size, min_size):
    """
    :param size: concrete size of the object
    :param max_size: upper bound sentinel (see module docstring)
    :param min_size: lower bound, never negative
    :rtype bool: True if the size satisfies the bounds
    """
    assert min_size >= 0

    if max_size < 0:
        return True
    elif max_size == 0:
        return size >= min_size
    else:
        return min_size <= size <= max_size


def size_constraints(symbol, max_size, min_size):
    assert min_size >= 0

    constraints = []
    if max_size > 0:
        constraints.append(Constraint(symbol, "<=", max_size))
    constraints.append(Constraint(symbol, ">=", min_size))
    return constraints


def range_constraints(symbol, lower, upper):
    """ inclusive [lower, upper] range on a scalar """
    return [Constraint(symbol, ">=", lower), Constraint(symbol, "<=", upper)]


def constrain(engine, symbol, max_size, min_size):
    """
    emit the size constraints matching check(). Only meant to be called
    once the object passed check() with a maximum of zero or more.

    :param engine: Engine receiving the assumptions
    :param symbol: tracked size word returned by Engine.track_buffer()
    """
    for constraint in size_constraints(symbol, max_size, min_size):
        logging.debug(f"Assuming size {constraint.operator} {constraint.bound}")
        engine.assume(constraint)
