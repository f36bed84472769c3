from src.services import (
    challenge_service,
    completion_service,
    date_mapper,
    persistence_service,
    task_service,
    view_service,
)


__all__ = [
    "challenge_service",
    "completion_service",
    "date_mapper",
    "persistence_service",
    "task_service",
    "view_service",
]
