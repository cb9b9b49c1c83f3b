from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


PRODUCT_COLUMNS = [
    "_id",
    "Title",
    "Price",
    "Description",
    "Category",
    "Image",
    "Sold",
    "Is Sale",
    "DateOfSale",
]


def _blank_to_none(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class ProductRecord(BaseModel):
    """One product as returned by the catalog API.

    Field aliases match the table column keys; the lowercase ``category``
    spelling some payloads use is accepted as well.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: Optional[str] = Field(default=None, alias="_id", validation_alias=AliasChoices("_id", "id"))
    title: str = Field(default="", alias="Title")
    price: float = Field(default=0.0, alias="Price", ge=0)
    description: str = Field(default="", alias="Description")
    category: Optional[str] = Field(default=None, alias="Category", validation_alias=AliasChoices("Category", "category"))
    image: Optional[str] = Field(default=None, alias="Image")
    sold: bool = Field(default=False, alias="Sold")
    is_sale: bool = Field(default=False, alias="Is Sale", validation_alias=AliasChoices("Is Sale", "isSale", "is_sale"))
    date_of_sale: Optional[str] = Field(default=None, alias="DateOfSale")

    @field_validator("id", "date_of_sale", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        return None if value is None else str(value)

    @field_validator("title", "description", mode="before")
    @classmethod
    def _text_or_empty(cls, value: Any) -> Any:
        return "" if value is None else str(value)

    @field_validator("category", "image", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        return None if value is None else str(value)

    @field_validator("price", mode="before")
    @classmethod
    def _price_default(cls, value: Any) -> Any:
        if _blank_to_none(value) is None:
            return 0.0
        return value

    @field_validator("sold", "is_sale", mode="before")
    @classmethod
    def _flag_default(cls, value: Any) -> Any:
        return False if value is None else value

    def to_row(self) -> dict:
        return self.model_dump(by_alias=True)
