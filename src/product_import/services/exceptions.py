"""Service layer exception classes for the product import engine.

Exception Hierarchy:
    ServiceError (base)
    ├── ProductImportError
    ├── MetaDataError
    └── UnsupportedDialectError

Record-level problems (unresolvable references, invalid values) are not
raised: they are recorded on the product with add_error(). Exceptions are
batch-level and make the coordinator roll back the whole batch.
"""


class ServiceError(Exception):
    """Base exception for all service layer errors.

    All service-specific exceptions should inherit from this class.
    """

    pass


class ProductImportError(ServiceError):
    """Raised when a batch cannot be processed as given.

    Example:
        >>> raise ProductImportError("A batch needs at least one product")
        ProductImportError: A batch needs at least one product
    """

    pass


class MetaDataError(ServiceError):
    """Raised when the catalog metadata snapshot is inconsistent or incomplete.

    Args:
        message: What is missing or inconsistent
    """

    def __init__(self, message: str):
        super().__init__(f"Metadata error: {message}")


class UnsupportedDialectError(ServiceError):
    """Raised when the store's SQL dialect has no bulk upsert support here.

    Args:
        dialect_name: SQLAlchemy dialect name of the bound engine
    """

    def __init__(self, dialect_name: str):
        self.dialect_name = dialect_name
        super().__init__(f"Bulk import is not supported for the '{dialect_name}' dialect")

