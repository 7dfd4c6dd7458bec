"""Pipeline failure types"""


class SchemaLoadError(RuntimeError):
    """The schema document could not be fetched or decoded. Terminal for the note."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url
