from pydantic import BaseModel


class BackendStatus(BaseModel):
    configured: bool


class MigrationResult(BaseModel):
    migrated: int
    total: int
