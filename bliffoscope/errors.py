# errors.py
class BliffoscopeError(Exception):
    """Base class for structural precondition violations in the scan core."""


class InvalidInputType(BliffoscopeError, TypeError):
    pass


class MalformedGrid(BliffoscopeError, ValueError):
    pass


class IndexOutOfRange(BliffoscopeError, IndexError):
    pass
