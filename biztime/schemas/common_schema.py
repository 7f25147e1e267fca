from typing import Literal

from pydantic import BaseModel


class DeletedResponse(BaseModel):
    status: Literal["deleted"] = "deleted"
