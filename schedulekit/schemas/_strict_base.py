"""Strict schema baselines with forbidden extras by default."""

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Neutral strict base for output DTOs."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class SnapshotModel(StrictModel):
    """Immutable input record handed to the calculator by the caller."""

    model_config = ConfigDict(extra="forbid", frozen=True)
