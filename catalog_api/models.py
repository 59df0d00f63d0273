# catalog_api/models.py
from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    description: str
    price: Union[int, float]
    category: str
    in_stock: bool = Field(alias="inStock")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
