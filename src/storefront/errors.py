"""Storefront-specific exceptions.

NotFound and InvalidArgument failures use Protean's own
``ObjectNotFoundError`` and ``ValidationError``.
"""


class PermissionDeniedError(Exception):
    """The acting user does not own the resource they tried to change."""

    def __init__(self, messages):
        super().__init__(messages)
        self.messages = messages
