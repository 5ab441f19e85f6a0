"""Exceptions raised by the matching core."""


class InvalidArgument(ValueError):
    """A caller passed a bad limit, weight table or policy name."""
