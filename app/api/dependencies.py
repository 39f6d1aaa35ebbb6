"""
FastAPI dependency providers.

The request handlers are built once by the application lifespan and stored on
`app.state`; routes receive them through `Depends(get_actions)`.
"""

from fastapi import Request

from app.services.actions import DashboardActions


def get_actions(request: Request) -> DashboardActions:
    return request.app.state.actions
