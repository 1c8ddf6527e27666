from typing import List

from pydantic import BaseModel, constr


class ImageUploadOut(BaseModel):
    uploaded: bool = True
    url: List[str]


class ImageDeleteIn(BaseModel):
    key: constr(min_length=1, max_length=1024)


class ImageDeleteOut(BaseModel):
    deleted: bool = True
