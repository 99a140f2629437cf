from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# camelCase on the wire, snake_case in python
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class MessageOut(CamelModel):
    status: str = "success"
    message: str
