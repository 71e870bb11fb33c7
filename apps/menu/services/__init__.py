"""Services for menu business logic."""

from .availability import (
    build_menu_index,
    refresh_menu_availability,
)

__all__ = [
    'build_menu_index',
    'refresh_menu_availability',
]
