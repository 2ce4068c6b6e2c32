class ValidationError(Exception):
    """
    raised when a novel adjacency is malformed, for example when the left breakpoint is positioned
    to the right of the right breakpoint. These are never corrected silently
    """

    pass


class ClassificationError(Exception):
    """
    raised when the signals of a novel adjacency are contradictory or describe an event type which
    cannot be called (ex. an insertion without inserted sequence or a translocation)
    """

    pass


class InternalInvariantViolation(Exception):
    """
    raised when the classifier produces a type outside the known vocabulary. Indicates a logic error
    rather than a data problem
    """

    pass
