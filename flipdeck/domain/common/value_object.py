"""
Value object base class.

A value object has no identity of its own: two instances holding the same
attributes are interchangeable. Card ids are the main value objects here;
ratings are plain enums.
"""


class ValueObject:
    """
    Immutable, compared by value.

    Subclasses are frozen dataclasses and validate themselves in
    ``__post_init__``.
    """

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash((type(self), tuple(vars(self).values())))

    def to_primitive(self) -> object:
        """The value as it appears in logs and event payloads."""
        fields = vars(self)
        if len(fields) == 1:
            return next(iter(fields.values()))
        return dict(fields)
