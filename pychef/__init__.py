"""
pychef

    Marshaling layer between host values and a concolic execution engine.

"""
from pychef.assignments import AssignmentDecoder, TypedValue, convert_buffer_value, decode_assignment
from pychef.engine import Engine, InactiveEngine
from pychef.layout import Layout
from pychef.session import ConcolicSession
