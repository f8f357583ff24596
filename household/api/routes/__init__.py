"""API routers."""

from household.api.routes import dashboard, households, line_items, members, shared_expenses

__all__ = ["dashboard", "households", "line_items", "members", "shared_expenses"]
