from pydantic import BaseModel


class StatusCount(BaseModel):
    status: str
    count: int
    color: str


class HerdSummary(BaseModel):
    total: int
    by_type: dict[str, int]
    by_status: list[StatusCount]
    by_gender: dict[str, int]
