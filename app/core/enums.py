from enum import Enum


class UrgencyTier(str, Enum):
    STANDARD = "standard"
    EXPEDITED = "expedited"
    OVERNIGHT = "overnight"

    def __str__(self):
        return self.value


class Accessorial(str, Enum):
    INSIDE_DELIVERY = "inside_delivery"
    WHITE_GLOVE = "white_glove"
    AFTER_HOURS = "after_hours"

    def __str__(self):
        return self.value


class ResolutionErrorKind(str, Enum):
    MISSING_CREDENTIAL = "missing_credential"
    NO_MATCH = "no_match"
    NO_ROUTE = "no_route"
    TRANSPORT = "transport"

    def __str__(self):
        return self.value


class ResolutionState(str, Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    SUCCESS = "success"
    FAILED = "failed"

    def __str__(self):
        return self.value
