from pydantic import BaseModel, ConfigDict, Field


class StockCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    quantity: int = Field(ge=0)
    relation_id: str = Field(alias="relationId")


class StockUpdate(BaseModel):
    stock: int = Field(ge=0)


class StockOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    quantity: int
    relation_id: str = Field(alias="relationId")
