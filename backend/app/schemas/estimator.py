from pydantic import BaseModel, ConfigDict


class EstimatorRead(BaseModel):
    id: str
    fullname: str

    model_config = ConfigDict(from_attributes=True)
