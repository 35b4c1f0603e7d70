from typing import Optional

from app.core.enums import ResolutionErrorKind

RESOLUTION_MESSAGES = {
    ResolutionErrorKind.MISSING_CREDENTIAL: "API key missing. Check configuration (ORS_API_KEY).",
    ResolutionErrorKind.NO_MATCH: "Couldn't find that place. Try a more specific city / state.",
    ResolutionErrorKind.NO_ROUTE: "No route found. Try a more specific city / state.",
    ResolutionErrorKind.TRANSPORT: "Error talking to routing service. Try again.",
}


class ResolutionError(Exception):
    """Categorized route resolution failure with a user-facing message."""

    def __init__(self, kind: ResolutionErrorKind, message: Optional[str] = None):
        self.kind = kind
        self.message = message or RESOLUTION_MESSAGES[kind]
        super().__init__(self.message)

    def __repr__(self):
        return f"ResolutionError(kind={self.kind.value!r}, message={self.message!r})"
