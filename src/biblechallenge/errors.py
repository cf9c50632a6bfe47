"""Exception types raised by the reading challenge core."""


class ChallengeError(Exception):
    """Base error for the reading challenge."""

    pass


class StoreUnavailable(ChallengeError):
    """The backing store could not answer a query or accept a write."""

    pass


class ConflictError(ChallengeError):
    """A reading with the same unique key already exists."""

    pass


class ReadingValidationError(ChallengeError):
    """A reading was rejected before reaching the store."""

    pass


class UnknownBookError(ReadingValidationError):
    """Book name is not part of the canon."""

    def __init__(self, book: str):
        self.book = book
        super().__init__(f"Unknown book: {book}")


class UnknownMemberError(ChallengeError):
    """No profile exists for the given login or user id."""

    pass
