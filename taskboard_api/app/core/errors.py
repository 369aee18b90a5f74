"""
Error kinds raised by the project membership workflow.

Validation errors (unknown login, self invitation, missing membership)
derive from ``ValueError`` like the other validation failures in the
service layer; they are always raised before anything is written.
``PersistenceError`` signals that the database refused a write and the
surrounding transaction was rolled back.
"""


class MembershipError(Exception):
    """Base class for membership workflow errors."""


class UnknownUserError(MembershipError, ValueError):
    """One of the requested logins does not belong to any user."""

    def __init__(self, logins):
        self.logins = sorted(logins)
        super().__init__(f"Unknown user login(s): {', '.join(self.logins)}")


class SelfInvitationError(MembershipError, ValueError):
    """The creator of a project listed their own login as an invitee."""

    def __init__(self, login: str):
        self.login = login
        super().__init__(
            f"User {login} can't invite themselves; the creator joins the project automatically"
        )


class MembershipNotFoundError(MembershipError, ValueError):
    """The project or the acting user's membership does not exist."""


class PersistenceError(MembershipError, RuntimeError):
    """A write to the underlying store failed."""
