class AppError:
    """Represents different categories of application errors."""

    def __init__(self, category: str, message: str) -> None:
        # 'verification', 'transport', 'catalog_lookup', 'local_deletion',
        # 'ledger_write', 'ledger_query', 'validation', 'internal_error'
        self.category = category
        self.message = message

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"AppError(category={self.category!r}, message={self.message!r})"
