"""
session.py

    Public entry point for marking host values as concolic.

"""
import logging

from pychef.errors import EngineInactive, InvalidSize, UnsupportedType
from pychef.layout import Layout
from pychef.values import ValueConverter


class ConcolicSession:
    """
    marks host values as concolic through an Engine. The only state kept
    between calls is the ceiling on dict and tuple sizes, fixed when the
    session is created.
    """

    def __init__(self, engine, max_symbolic_size=None, layout=None):
        """
        :param engine: Engine the values are registered with
        :param max_symbolic_size: ceiling for dict and tuple sizes, defaults
            to the one configured in the engine
        :param layout: Layout used to pack tracked buffers
        """
        if max_symbolic_size is None:
            max_symbolic_size = engine.get_configured_max_size()

        self._engine = engine
        self._max_symbolic_size = max_symbolic_size
        self._converter = ValueConverter(engine, layout or Layout.native(), max_symbolic_size)

    @property
    def engine(self):
        return self._engine

    @property
    def max_symbolic_size(self):
        return self._max_symbolic_size

    def _require_active(self):
        if not self._engine.is_active():
            raise EngineInactive()

    def make_symbolic_int(self, value, name, max_value=-1, min_value=0):
        """
        make an integer concolic under `name`. When max_value >= min_value
        the value must lie in [min_value, max_value] and the range is
        added to the engine's constraints.

        :rtype int: the value the engine yields for the tracked integer
        """
        self._require_active()

        if isinstance(value, bool) or not isinstance(value, int):
            raise UnsupportedType(f"Expected an int, got {type(value).__name__}")

        logging.debug(f"Making int {name} concolic in [{min_value}, {max_value}]")
        return self._converter.make_int(value, name, max_value, min_value)

    def make_symbolic_sequence(self, value, name, max_size=-1, min_size=0):
        """
        make a string, list, dict or tuple concolic under `name`.

        max_size < 0 leaves the size concrete, max_size == 0 only bounds it
        from below and max_size > 0 bounds it to [min_size, max_size].
        Dicts and tuples ignore both bounds and use the session ceiling.

        :return: the new string, or the container itself
        """
        self._require_active()

        if min_size < 0:
            raise InvalidSize("Minimum size cannot be negative")

        logging.debug(f"Making {type(value).__name__} {name} concolic")
        return self._converter.convert(value, name, max_size, min_size)

    def atomic(self):
        return self._engine.atomic()
