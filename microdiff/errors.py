# microdiff/errors.py


class MicrodiffError(Exception):
    """Base class for errors raised by microdiff."""


class DimensionMismatchError(MicrodiffError, ValueError):
    """
    An input vector's length disagrees with the declared width of the
    neuron, layer or network it was fed to.

    Raised before any node is built, so the graph is left untouched.
    """

    def __init__(self, expected: int, actual: int, where: str = "input"):
        self.expected = expected
        self.actual = actual
        self.where = where
        super().__init__(
            f"dimension mismatch for {where}: expected {expected} values, got {actual}"
        )

    def __reduce__(self):
        return (self.__class__, (self.expected, self.actual, self.where))
