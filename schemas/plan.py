"""Plan schemas and JSON helpers.

A plan is the exported form of one allocation run. Its id is a blake3 digest
of the capacity and the per-disk assignments, so the same input always
produces the same id.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import TypeVar

from blake3 import blake3
from pydantic import BaseModel, Field

from core.records import Disk

T = TypeVar("T", bound="_JsonMixin")


class _JsonMixin(BaseModel):
    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls: type[T], data: str) -> T:
        return cls.model_validate_json(data)


class PlanFileModel(_JsonMixin):
    name: str
    size: int = Field(ge=0)


class PlanDiskModel(_JsonMixin):
    id: int = Field(ge=1)
    free: int = Field(ge=0)
    files: list[PlanFileModel]


class PlanModel(_JsonMixin):
    id: str
    capacity: int = Field(gt=0)
    disks: list[PlanDiskModel]


def compute_plan_id(capacity: int, disks: Sequence[PlanDiskModel]) -> str:
    """Content-addressed plan id over capacity and assignments."""
    payload = {
        "capacity": capacity,
        "disks": [d.model_dump(mode="json") for d in disks],
    }
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return blake3(canonical.encode("utf-8")).hexdigest()


def build_plan(disks: Sequence[Disk], capacity: int) -> PlanModel:
    models = [
        PlanDiskModel(
            id=d.id,
            free=d.free,
            files=[PlanFileModel(name=f.name, size=f.size) for f in d.files],
        )
        for d in disks
    ]
    return PlanModel(id=compute_plan_id(capacity, models), capacity=capacity, disks=models)
