"""Realtime change notification helpers for the infrastructure layer."""

from .change_feed import ChangeCallback, ChangeFeed, change_feed

__all__ = ["ChangeCallback", "ChangeFeed", "change_feed"]
