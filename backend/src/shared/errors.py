"""Error kinds surfaced by the hospital query layer and the dataset loader."""


class HospitalQueryError(Exception):
    """Base class for caller-visible query failures."""


class BadRequestError(HospitalQueryError, ValueError):
    """A required parameter is missing or fails validation."""


class MissingParameterError(BadRequestError):
    pass


class InvalidRiskLevelError(BadRequestError):
    pass


class InvalidSortKeyError(BadRequestError):
    pass


class InvalidColorModeError(BadRequestError):
    pass


class HospitalNotFoundError(HospitalQueryError, LookupError):
    """A well-formed hospital id has no matching record."""

    def __init__(self, hospital_id: str) -> None:
        super().__init__(f"Hospital not found: {hospital_id}")
        self.hospital_id = hospital_id


class DatasetLoadError(RuntimeError):
    """The static hospital dataset could not be read or parsed."""
