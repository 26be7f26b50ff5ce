from pydantic import BaseModel, HttpUrl


class ClassifyRequest(BaseModel):
    url: HttpUrl
