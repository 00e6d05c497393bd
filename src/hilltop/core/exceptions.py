class CatalogError(Exception):
    """Base class for errors the API layer turns into JSON responses."""

    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(CatalogError):
    status_code = 404
    default_message = "Not found"


class ConflictError(CatalogError):
    status_code = 409
    default_message = "Conflict"


class CategoryInUseError(ConflictError):
    default_message = "Category is still referenced by resources"


class ReferentialIntegrityError(CatalogError):
    status_code = 400
    default_message = "Referenced category does not exist"


class StoreUnavailableError(CatalogError):
    status_code = 500
    default_message = "Internal server error"
