from pydantic import BaseModel, Field


class DatabaseSettings(BaseModel):
    username: str = Field(..., min_length=1, examples=["loader"])
    password: str = Field("", examples=["secret"])
    host: str = Field(..., min_length=1, examples=["localhost"])
    port: int = Field(..., gt=0, le=65535, examples=[5432])
    name: str = Field(..., min_length=1, examples=["reporting"])
