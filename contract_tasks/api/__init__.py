"""Read-only HTTP view of the task registry"""

from contract_tasks.api.fastapi_app import create_app

__all__ = ["create_app"]
