"""Errors raised at the server-list boundary."""


class InvalidInputShape(TypeError):
    """The server list is not list-shaped."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Server list must be a list, got {type(value).__name__}")
