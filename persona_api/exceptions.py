# persona_api/exceptions.py
"""Error types raised by the persona services.

Routers translate these into HTTP responses; services never raise
``HTTPException`` themselves.
"""


class PersonaApiError(Exception):
    """Base class for errors raised by this application."""


class NotFoundError(PersonaApiError, LookupError):
    """A run or persona id is absent from its store."""

    kind = "Resource"

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"{self.kind} {identifier} not found")


class RunNotFoundError(NotFoundError):
    kind = "Test run"


class PersonaNotFoundError(NotFoundError):
    kind = "Persona"
