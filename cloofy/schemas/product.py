from typing import List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from cloofy.core.records import RecipeLine


class RecipeLineIn(BaseModel):
    ingredient_id: int = Field(
        validation_alias=AliasChoices("ingredientId", "ingredient_id"),
        serialization_alias="ingredientId",
    )
    qty: float = Field(
        validation_alias=AliasChoices("qty", "quantity_per_unit"),
        allow_inf_nan=False,
    )

    model_config = ConfigDict(populate_by_name=True)

    def to_record(self) -> RecipeLine:
        return RecipeLine(ingredient_id=self.ingredient_id, quantity_per_unit=self.qty)


class RecipeLineRead(BaseModel):
    ingredientId: int
    qty: float


class ProductCreate(BaseModel):
    name: str
    price: float = Field(allow_inf_nan=False)
    recipe: List[RecipeLineIn] = Field(default_factory=list)


class ProductRead(BaseModel):
    id: int
    name: str
    price: float
    recipe: List[RecipeLineRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_record(cls, product) -> "ProductRead":
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            recipe=[
                RecipeLineRead(ingredientId=line.ingredient_id, qty=line.quantity_per_unit)
                for line in product.recipe
            ],
        )
