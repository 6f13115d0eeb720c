"""Domain errors raised by the ledger, the sale processor and storage.

Everything except :class:`StorageFailure` is a recoverable, non-transient
failure that the HTTP layer reports back to the caller as-is.
"""


class CloofyError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict:
        return {"error": self.message}


class NotFound(CloofyError):
    status_code = 404


class IngredientNotFound(NotFound):
    def __init__(self, ingredient_id: int):
        super().__init__("Ingredient not found")
        self.ingredient_id = ingredient_id


class ProductNotFound(NotFound):
    def __init__(self, product_id: int):
        super().__init__("Product not found")
        self.product_id = product_id


class InvalidQuantity(CloofyError):
    def __init__(self, value, message: str = "Quantity must be a positive whole number"):
        super().__init__(message)
        self.value = value


class InsufficientStock(CloofyError):
    def __init__(self, ingredient_name: str, required: float, available: float):
        super().__init__(f"Not enough stock for ingredient {ingredient_name}")
        self.ingredient_name = ingredient_name
        self.required = required
        self.available = available

    def to_payload(self) -> dict:
        return {"error": self.message, "ingredient": self.ingredient_name}


class IngredientMissing(CloofyError):
    def __init__(self, ingredient_id: int):
        super().__init__(f"Ingredient {ingredient_id} missing")
        self.ingredient_id = ingredient_id


class InvalidRecipe(CloofyError):
    pass


class InvalidMonth(CloofyError):
    def __init__(self, value):
        super().__init__("month must be in YYYY-MM format")
        self.value = value


class StorageFailure(CloofyError):
    status_code = 503

    def to_payload(self) -> dict:
        return {"error": "Storage is unavailable, please retry"}


__all__ = [
    "CloofyError",
    "IngredientMissing",
    "IngredientNotFound",
    "InsufficientStock",
    "InvalidMonth",
    "InvalidQuantity",
    "InvalidRecipe",
    "NotFound",
    "ProductNotFound",
    "StorageFailure",
]
