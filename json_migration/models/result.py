from pydantic import BaseModel, Field


class MigrationResult(BaseModel):
    message: str = Field(...,
                         examples=["2 records inserted into tb_agama"])
    table: str = Field(..., examples=["tb_agama"])
    inserted: int = Field(..., ge=0, examples=[2])
